import unittest

SOURCE_FILE = """<?xml version="1.0" encoding="UTF-8" ?>
<xliff xmlns="urn:oasis:names:tc:xliff:document:1.2" version="1.2">
  <file source-language="en" datatype="plaintext" original="ng2.template">
    <body>
      <trans-unit id="hello" datatype="html">
        <source>Hello <x id="INTERPOLATION" equiv-text="{{name}}"/></source>
      </trans-unit>
    </body>
  </file>
</xliff>
"""

TARGET_FILE = """<?xml version="1.0" encoding="UTF-8" ?>
<xliff xmlns="urn:oasis:names:tc:xliff:document:1.2" version="1.2">
  <file source-language="en" target-language="de" datatype="plaintext" original="ng2.template">
    <body>
    </body>
  </file>
</xliff>
"""


class TestAppConfig(unittest.TestCase):
    def test_defaults(self):
        from i18nsupport.config.app_config import AppConfig

        config = AppConfig()
        self.assertFalse(config.beautify_output)
        self.assertEqual(config.indent_string, "  ")
        self.assertEqual(config.max_nesting_depth, 64)

    def test_dict_and_json(self):
        from i18nsupport.config.app_config import AppConfig

        config = AppConfig(beautify_output=True, indent_string="\t", new_trans_unit_target_prefix="NEW: ")
        self.assertEqual(AppConfig.from_dict(config.to_dict()), config)
        self.assertEqual(AppConfig.from_json(config.to_json()), config)
        self.assertEqual(AppConfig.from_dict({}), AppConfig())

    def test_invalid_indent(self):
        from i18nsupport.config.app_config import AppConfig

        with self.assertRaises(ValueError):
            AppConfig.from_dict({"indent_string": "--"})
        with self.assertRaises(ValueError):
            AppConfig(indent_string="--").serializer_options(["source"])

    def test_config_applied_to_file(self):
        from i18nsupport.config.app_config import AppConfig
        from i18nsupport.xliff_file import XliffFile

        config = AppConfig(new_trans_unit_target_prefix="NEW: ", max_nesting_depth=8)
        target_file = XliffFile(TARGET_FILE, "messages.de.xlf", "UTF-8", config)
        self.assertEqual(target_file.message_dialect().max_nesting_depth, 8)
        self.assertIs(target_file.config(), config)

        source_unit = XliffFile(SOURCE_FILE, "messages.xlf", "UTF-8").trans_unit_with_id("hello")
        new_unit = target_file.import_new_trans_unit(source_unit, False, True)
        self.assertEqual(new_unit.target_content_normalized().as_display_string(), "NEW: Hello {{0}}")
        self.assertEqual(new_unit.target_state(), "new")

    def test_beautify_from_config(self):
        from i18nsupport.config.app_config import AppConfig
        from i18nsupport.xliff_file import XliffFile

        compact = TARGET_FILE.replace("\n    <body>\n    </body>\n  ", "<body></body>")
        file = XliffFile(compact, "messages.de.xlf", "UTF-8", AppConfig(beautify_output=True))
        self.assertIn("\n    <body/>\n", file.edited_content())
        self.assertIn('"ng2.template"><body/></file>', file.edited_content(beautify_output=False))


if __name__ == "__main__":
    unittest.main()
