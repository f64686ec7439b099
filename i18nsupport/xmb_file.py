"""
XMB files (Angular message catalog, ng xi18n --i18n-format xmb).

    <messagebundle>
      <msg id="..." desc="..." meaning="..."><source>src/app/app.component.ts:6</source>Entry <ph name="INTERPOLATION"><ex>INTERPOLATION</ex></ph></msg>
    </messagebundle>

XMB holds the master messages only, translations are stored in XTB files.
"""
from typing import List, Optional

from lxml import etree

from .constants import FILETYPE_XMB, FORMAT_XMB
from .dom_utilities import find_children, find_descendants, get_text_content, get_xml_content, local_name, \
    remove_element
from .errors import InvalidFileError, UnsupportedOperationError
from .trans_unit import AbstractTransUnit, SourceReference, parse_source_reference
from .translation_messages_file import INSERT_AT_END, AbstractTranslationMessagesFile
from .xmb_message_parser import XMB_IGNORED_ELEMENTS, XMB_MESSAGE_DIALECT
from .xtb_message_parser import XTB_MESSAGE_DIALECT

XTB_DOCTYPE = """<!DOCTYPE translationbundle [
  <!ELEMENT translationbundle (translation)*>
  <!ATTLIST translationbundle lang CDATA #REQUIRED>
  <!ELEMENT translation (#PCDATA|ph)*>
  <!ATTLIST translation id CDATA #REQUIRED>
  <!ELEMENT ph EMPTY>
  <!ATTLIST ph name CDATA #REQUIRED>
]>"""


class XmbTransUnit(AbstractTransUnit):
    """A <msg> element. Source and target are the same thing in XMB."""

    def source_content(self) -> str:
        return get_xml_content(self._element, XMB_IGNORED_ELEMENTS)

    def supports_set_source_content(self) -> bool:
        return False

    def set_source_content(self, new_content: str):
        # the source is owned by the template, not by the catalog
        pass

    def create_source_content_normalized(self):
        return self.message_dialect().create_normalized_message_from_xml(self._element)

    def target_content(self) -> str:
        return self.source_content()

    def target_content_normalized(self):
        return self.message_dialect().create_normalized_message_from_xml(self._element, self.source_content_normalized())

    def native_target_state(self) -> Optional[str]:
        return None

    def set_native_target_state(self, native_state: str):
        pass

    def source_references(self) -> List[SourceReference]:
        references = []
        for source in find_children(self._element, "source"):
            reference = parse_source_reference(get_text_content(source))
            if reference:
                references.append(reference)
        return references

    def set_source_references(self, source_references: List[SourceReference]):
        for source in find_children(self._element, "source"):
            remove_element(source)
        # the references go in front of the message text
        text = self._element.text
        self._element.text = None
        for index, reference in enumerate(source_references):
            source = etree.Element("source")
            source.text = f"{reference.sourcefile}:{reference.linenumber}"
            self._element.insert(index, source)
        if source_references:
            self._element[len(source_references) - 1].tail = text
        else:
            self._element.text = text

    def description(self) -> Optional[str]:
        return self._element.get("desc")

    def meaning(self) -> Optional[str]:
        return self._element.get("meaning")

    def supports_set_description_and_meaning(self) -> bool:
        return False

    def translate_native(self, native_translation: str):
        raise UnsupportedOperationError("cannot translate xmb files, use xtb instead", FORMAT_XMB)

    def source_content_as_xtb(self) -> str:
        """Source rendered with the XTB placeholders (<ph name="..."/>)."""
        return XTB_MESSAGE_DIALECT.create_normalized_message_from_xml(self._element).as_native_string()

    def clone_with_source_as_target(self, is_default_lang: bool, copy_content: bool, target_file):
        # the clone is a <translation> of an XTB file, this unit is its master
        from .xtb_file import XtbTransUnit
        element = etree.Element("translation")
        element.set("id", self._id or "")
        clone = XtbTransUnit(element, self._id, target_file, self)
        content = clone.new_target_content(self.source_content_as_xtb(), is_default_lang, copy_content)
        clone.translate_native(content)
        return clone

    def use_source_as_target(self, is_default_lang: bool, copy_content: bool):
        pass


class XmbFile(AbstractTranslationMessagesFile):

    def i18n_format(self) -> str:
        return FORMAT_XMB

    def file_type(self) -> str:
        return FILETYPE_XMB

    def base_message_dialect(self):
        return XMB_MESSAGE_DIALECT

    def init_document(self):
        if local_name(self._root) != "messagebundle":
            raise InvalidFileError(
                f'File "{self._filename}" seems to be no xmb file (should contain a messagebundle element)',
                self._filename,
            )

    def init_trans_units(self) -> list:
        units = []
        for element in find_descendants(self._root, "msg"):
            unit_id = element.get("id")
            if not unit_id:
                self.add_warning(f'oops, msg without "id" found in master, please check file {self._filename}')
            units.append(XmbTransUnit(element, unit_id, self))
        return units

    def trans_unit_container(self):
        return self._root

    def guess_language_from_filename(self) -> Optional[str]:
        """messages.de.xmb -> de"""
        if not self._filename:
            return None
        parts = self._filename.split(".")
        if len(parts) > 2 and parts[-1].lower() == "xmb":
            return parts[-2]
        return None

    def source_language(self) -> Optional[str]:
        return self.guess_language_from_filename()

    def set_source_language(self, language: str):
        # xmb has no notation for this
        pass

    def target_language(self) -> Optional[str]:
        return self.guess_language_from_filename()

    def set_target_language(self, language: str):
        pass

    def import_new_trans_unit(self, foreign_trans_unit, is_default_lang: bool, copy_content: bool,
                              import_after=INSERT_AT_END):
        raise UnsupportedOperationError("xmb file cannot be used to store translations, use xtb file", FORMAT_XMB)

    def create_translation_file_for_lang(self, lang: str, filename: str, is_default_lang: bool,
                                         copy_content: bool):
        """Empty XTB file with this file as master, all units imported."""
        from .xtb_file import XtbFile
        encoding = self._encoding or "UTF-8"
        skeleton = (f'<?xml version="1.0" encoding="{encoding}"?>\n{XTB_DOCTYPE}\n'
                    '<translationbundle>\n</translationbundle>\n')
        translation_file = XtbFile(skeleton, filename, self._encoding, self, self._config)
        translation_file.set_new_trans_unit_target_prefix(self._target_prefix)
        translation_file.set_new_trans_unit_target_suffix(self._target_suffix)
        translation_file.set_target_language(lang)
        for unit in self:
            translation_file.import_new_trans_unit(unit, is_default_lang, copy_content)
        return translation_file
