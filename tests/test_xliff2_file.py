import unittest

XLIFF2_SAMPLE = """<?xml version="1.0" encoding="UTF-8" ?>
<xliff xmlns="urn:oasis:names:tc:xliff:document:2.0" version="2.0" srcLang="en" trgLang="de">
  <file original="ng.template" id="ngi18n">
    <unit id="simple">
      <notes>
        <note category="description">app title</note>
        <note category="meaning">title</note>
        <note category="location">src/app/app.component.ts:10</note>
      </notes>
      <segment state="final">
        <source>My first I18N Application</source>
        <target>Meine erste I18N Anwendung</target>
      </segment>
    </unit>
    <unit id="tags">
      <segment>
        <source>Some <pc id="0" equivStart="START_BOLD_TEXT" equivEnd="CLOSE_BOLD_TEXT" type="fmt" dispStart="&lt;b&gt;" dispEnd="&lt;/b&gt;">bold</pc> text<ph id="1" equiv="LINE_BREAK" type="fmt" disp="&lt;br/&gt;"/>done</source>
      </segment>
    </unit>
    <unit id="placeholder">
      <segment state="translated">
        <source>Entry <ph id="0" equiv="INTERPOLATION" disp="{{number}}"/> of <ph id="1" equiv="INTERPOLATION_1" disp="{{total}}"/> added.</source>
        <target>Eintrag <ph id="0" equiv="INTERPOLATION" disp="{{number}}"/> von <ph id="1" equiv="INTERPOLATION_1" disp="{{total}}"/> hinzugefügt.</target>
      </segment>
    </unit>
    <unit id="legacyicuref">
      <segment state="reviewed">
        <source>Items: <ph id="0"/></source>
        <target>Posten: <ph id="0"/></target>
      </segment>
    </unit>
  </file>
</xliff>
"""

OTHER_SAMPLE = """<?xml version="1.0" encoding="UTF-8" ?>
<xliff xmlns="urn:oasis:names:tc:xliff:document:2.0" version="2.0" srcLang="en">
  <file original="ng.template" id="ngi18n">
    <unit id="newunit">
      <segment>
        <source>Hello <ph id="0" equiv="INTERPOLATION" disp="{{name}}"/></source>
      </segment>
    </unit>
    <unit id="newicu">
      <segment>
        <source>{VAR_PLURAL, plural, =0 {none} other {many}}</source>
      </segment>
    </unit>
  </file>
</xliff>
"""


class TestXliff2File(unittest.TestCase):
    def setUp(self):
        from i18nsupport.xliff2_file import Xliff2File
        self.file = Xliff2File(XLIFF2_SAMPLE, "messages.de.xlf", "UTF-8")

    def test_file_properties(self):
        self.assertEqual(self.file.file_type(), "XLIFF 2.0")
        self.assertEqual(self.file.i18n_format(), "xlf2")
        self.assertEqual(self.file.source_language(), "en")
        self.assertEqual(self.file.target_language(), "de")
        self.assertEqual(self.file.number_of_trans_units(), 4)
        self.assertEqual(self.file.warnings(), [])

    def test_simple_unit(self):
        from i18nsupport.trans_unit import SourceReference

        unit = self.file.trans_unit_with_id("simple")
        self.assertEqual(unit.source_content(), "My first I18N Application")
        self.assertEqual(unit.target_content(), "Meine erste I18N Anwendung")
        self.assertEqual(unit.target_state(), "final")
        self.assertEqual(unit.description(), "app title")
        self.assertEqual(unit.meaning(), "title")
        self.assertEqual(unit.source_references(), [SourceReference("src/app/app.component.ts", 10)])
        self.assertEqual(unit.notes(), [])

    def test_states(self):
        self.assertEqual(self.file.trans_unit_with_id("tags").target_state(), "new")
        self.assertEqual(self.file.trans_unit_with_id("placeholder").target_state(), "translated")
        # reviewed is read as translated
        self.assertEqual(self.file.trans_unit_with_id("legacyicuref").target_state(), "translated")
        self.assertEqual(self.file.number_of_untranslated_trans_units(), 1)
        self.assertEqual(self.file.number_of_reviewed_trans_units(), 2)

    def test_normalized_content(self):
        tags = self.file.trans_unit_with_id("tags")
        self.assertEqual(tags.source_content_normalized().as_display_string(), "Some <b>bold</b> text<br/>done")

        placeholder = self.file.trans_unit_with_id("placeholder")
        self.assertEqual(placeholder.target_content_normalized().as_display_string(),
                         "Eintrag {{0}} von {{1}} hinzugefügt.")
        self.assertIsNone(placeholder.target_content_normalized().validate())

        legacy = self.file.trans_unit_with_id("legacyicuref")
        self.assertEqual(legacy.source_content_normalized().as_display_string(), "Items: <ICU-Message-Ref_0/>")

    def test_translate_paired_tags(self):
        from i18nsupport.dom_utilities import find_child, local_name

        unit = self.file.trans_unit_with_id("tags")
        unit.translate("Etwas <b>fett</b> Text<br/>fertig")
        self.assertEqual(
            unit.target_content(),
            'Etwas <pc id="0" equivStart="START_BOLD_TEXT" equivEnd="CLOSE_BOLD_TEXT" type="fmt" '
            'dispStart="&lt;b>" dispEnd="&lt;/b>">fett</pc> Text'
            '<ph id="1" equiv="LINE_BREAK" type="fmt" disp="&lt;br/>"/>fertig'
        )
        segment = find_child(unit.as_xml_element(), "segment")
        self.assertEqual([local_name(child) for child in segment], ["source", "target"])
        self.assertEqual(segment.get("state"), "translated")

    def test_translate_placeholder_keeps_disp(self):
        unit = self.file.trans_unit_with_id("placeholder")
        unit.translate("{{1}} von {{0}}")
        self.assertEqual(
            unit.target_content(),
            '<ph id="0" equiv="INTERPOLATION_1" disp="{{total}}"/> von <ph id="1" equiv="INTERPOLATION" disp="{{number}}"/>'
        )

    def test_set_target_state(self):
        unit = self.file.trans_unit_with_id("tags")
        unit.set_target_state("final")
        self.assertEqual(unit.native_target_state(), "final")
        unit.set_target_state("new")
        self.assertEqual(unit.native_target_state(), "initial")

    def test_set_description_creates_notes(self):
        unit = self.file.trans_unit_with_id("tags")
        self.assertIsNone(unit.description())
        unit.set_description("a description")
        self.assertEqual(unit.description(), "a description")
        self.assertIn('<note category="description">a description</note>', self.file.edited_content())

    def test_source_references(self):
        from i18nsupport.trans_unit import SourceReference

        unit = self.file.trans_unit_with_id("simple")
        refs = [SourceReference("a.ts", 1), SourceReference("b.ts", 2)]
        unit.set_source_references(refs)
        self.assertEqual(unit.source_references(), refs)
        self.assertEqual(unit.description(), "app title")
        self.assertIn('<note category="location">b.ts:2</note>', self.file.edited_content())

    def test_warnings_for_missing_id(self):
        from i18nsupport.xliff2_file import Xliff2File

        file = Xliff2File(XLIFF2_SAMPLE.replace('<unit id="tags">', "<unit>"), "broken.xlf", "UTF-8")
        self.assertEqual(file.number_of_trans_units_without_id(), 1)
        self.assertIn('trans-unit without "id"', file.warnings()[0])

    def test_wrong_version(self):
        from i18nsupport.errors import InvalidFileError
        from i18nsupport.xliff2_file import Xliff2File

        with self.assertRaises(InvalidFileError):
            Xliff2File(XLIFF2_SAMPLE.replace('version="2.0"', 'version="1.2"'), "x.xlf", "UTF-8")


class TestXliff2Import(unittest.TestCase):
    def setUp(self):
        from i18nsupport.xliff2_file import Xliff2File
        self.file = Xliff2File(XLIFF2_SAMPLE, "messages.de.xlf", "UTF-8")
        self.other = Xliff2File(OTHER_SAMPLE, "messages.xlf", "UTF-8")

    def test_import_without_copy(self):
        new_unit = self.file.import_new_trans_unit(self.other.trans_unit_with_id("newunit"), False, False)
        self.assertEqual(new_unit.native_target_state(), "initial")
        self.assertEqual(new_unit.target_content(), "")
        self.assertEqual(self.file.trans_units()[-1].id, "newunit")

    def test_import_with_copy(self):
        new_unit = self.file.import_new_trans_unit(self.other.trans_unit_with_id("newunit"), False, True)
        self.assertEqual(new_unit.target_content(), new_unit.source_content())
        self.assertEqual(new_unit.target_content_normalized().as_display_string(), "Hello {{0}}")

    def test_import_default_language(self):
        new_unit = self.file.import_new_trans_unit(self.other.trans_unit_with_id("newunit"), True, False)
        self.assertEqual(new_unit.native_target_state(), "final")

    def test_prefix_not_applied_to_icu(self):
        self.file.set_new_trans_unit_target_prefix("%%")
        self.file.set_new_trans_unit_target_suffix("!!")
        plain = self.file.import_new_trans_unit(self.other.trans_unit_with_id("newunit"), False, True)
        self.assertEqual(plain.target_content_normalized().as_display_string(), "%%Hello {{0}}!!")
        icu = self.file.import_new_trans_unit(self.other.trans_unit_with_id("newicu"), False, True)
        self.assertEqual(icu.target_content(), "{VAR_PLURAL, plural, =0 {none} other {many}}")

    def test_create_translation_file(self):
        translation = self.other.create_translation_file_for_lang("fr", "messages.fr.xlf", False, True)
        self.assertEqual(translation.target_language(), "fr")
        unit = translation.trans_unit_with_id("newunit")
        self.assertEqual(unit.target_content(), unit.source_content())
        self.assertEqual(unit.target_state(), "new")
        self.assertIn('trgLang="fr"', translation.edited_content())


if __name__ == "__main__":
    unittest.main()
