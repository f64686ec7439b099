import unittest


class TestIcuHelpers(unittest.TestCase):
    def test_icu_message_start(self):
        from i18nsupport.icu_message import is_icu_message_start

        self.assertTrue(is_icu_message_start("{n, plural, =0 {none}}"))
        self.assertTrue(is_icu_message_start("  { gender ,select, male {he}}"))
        self.assertFalse(is_icu_message_start("{{0}} items"))
        self.assertFalse(is_icu_message_start("{n, number}"))
        self.assertFalse(is_icu_message_start(None))

    def test_plural_categories(self):
        from i18nsupport.icu_message import is_valid_plural_category

        for category in ("=0", "=12", "zero", "one", "two", "few", "many", "other"):
            self.assertTrue(is_valid_plural_category(category), category)
        for category in ("=", "=a", "lots", "ONE"):
            self.assertFalse(is_valid_plural_category(category), category)

    def test_escaping(self):
        from i18nsupport.icu_message import escape_icu_text, unescape_icu_text

        self.assertEqual(unescape_icu_text("it''s '{'x'}'"), "it's {x}")
        self.assertEqual(escape_icu_text("it's {x}"), "it's '{'x'}'")
        self.assertEqual(escape_icu_text("a'{"), "a'''{'")


class TestIcuMessage(unittest.TestCase):
    def setUp(self):
        from i18nsupport.xliff_message_parser import XLIFF_MESSAGE_DIALECT
        self.dialect = XLIFF_MESSAGE_DIALECT

    def parse(self, text):
        return self.dialect.create_normalized_message_from_xml_string(text)

    def test_plural(self):
        message = self.parse("{n, plural, =0 {none} one {<x id=\"INTERPOLATION\"/> item} other {many}}")
        self.assertTrue(message.is_icu_message())
        icu = message.get_icu_message()
        self.assertTrue(icu.is_plural_message())
        self.assertFalse(icu.is_select_message())
        categories = icu.get_categories()
        self.assertEqual([c.category for c in categories], ["=0", "one", "other"])
        self.assertEqual(categories[1].message.as_display_string(), "{{0}} item")
        self.assertEqual(
            message.as_native_string(),
            '{VAR_PLURAL, plural, =0 {none} one {<x id="INTERPOLATION"/> item} other {many}}'
        )

    def test_select(self):
        message = self.parse("{gender, select, male {he} female {she} other {they}}")
        self.assertTrue(message.get_icu_message().is_select_message())
        self.assertEqual(message.as_native_string(), "{VAR_SELECT, select, male {he} female {she} other {they}}")

    def test_parse_icu_message_text(self):
        message = self.dialect.parse_icu_message_text("{count, select, a {A} other {B}}")
        self.assertTrue(message.is_icu_message())
        self.assertEqual(message.as_display_string(), "<ICU-Message/>")
        self.assertEqual(message.as_native_string(), "{VAR_SELECT, select, a {A} other {B}}")

    def test_translate(self):
        message = self.parse("{n, plural, =0 {none} one {one} other {many}}")
        translation = message.translate_icu_message({"=0": "keine", "other": "<b>viele</b>", "few": "wenige"})
        self.assertIs(translation.source_message, message)
        self.assertEqual(
            translation.as_native_string(),
            '{VAR_PLURAL, plural, =0 {keine} one {one} '
            'other {<x id="START_BOLD_TEXT" ctype="x-b" equiv-text="&lt;b>"/>viele<x id="CLOSE_BOLD_TEXT" ctype="x-b"/>} '
            'few {wenige}}'
        )

    def test_invalid_new_plural_category(self):
        from i18nsupport.errors import InvalidPluralCategoryError

        message = self.parse("{n, plural, =0 {none} other {many}}")
        with self.assertRaises(InvalidPluralCategoryError) as cm:
            message.translate_icu_message({"lots": "viele"})
        self.assertIn('invalid plural category "lots"', str(cm.exception))
        self.assertEqual(cm.exception.category, "lots")

    def test_select_cannot_get_new_categories(self):
        from i18nsupport.errors import UnknownCategoryError

        message = self.parse("{gender, select, male {he} female {she} other {they}}")
        with self.assertRaises(UnknownCategoryError) as cm:
            message.translate_icu_message({"neutral": "es"})
        self.assertIn('"neutral" is not part of message', str(cm.exception))

    def test_translate_with_wrong_method(self):
        from i18nsupport.errors import IcuMessageMismatchError

        icu = self.parse("{n, plural, =0 {none} other {many}}")
        with self.assertRaises(IcuMessageMismatchError):
            icu.translate("plain")
        plain = self.parse("plain text")
        with self.assertRaises(IcuMessageMismatchError):
            plain.translate_icu_message({"=0": "x"})

    def test_escaped_text(self):
        message = self.parse("{n, plural, =0 {it''s '{'braces'}'} other {x}}")
        body = message.get_icu_message().get_categories()[0].message
        self.assertEqual(body.as_display_string(), "it's {braces}")
        self.assertEqual(message.as_native_string(), "{VAR_PLURAL, plural, =0 {it's '{'braces'}'} other {x}}")

    def test_escapes_do_not_touch_attributes(self):
        message = self.parse(
            "{n, plural, =0 {<x id=\"INTERPOLATION\" equiv-text=\"{{ a || '' }}\"/> it''s} "
            "other {'{'x'}' <x id=\"INTERPOLATION_1\" equiv-text=\"'{'\"/>}}"
        )
        zero, other = [c.message for c in message.get_icu_message().get_categories()]
        self.assertEqual(zero.as_display_string(), "{{0}} it's")
        self.assertEqual(zero.placeholder_disp(0), "{{ a || '' }}")
        self.assertEqual(other.as_display_string(), "{x} {{1}}")
        self.assertEqual(other.placeholder_disp(1), "'{'")
        native = message.as_native_string()
        self.assertIn("equiv-text=\"{{ a || '' }}\"", native)
        self.assertIn("other {'{'x'}' <x id=\"INTERPOLATION_1\" equiv-text=\"'{'\"/>}", native)

    def test_new_category_is_appended(self):
        message = self.parse("{n, plural, =0 {kein Schaf} =1 {ein Schaf} other {Schafe}}")
        translation = message.translate_icu_message({"=0": "no sheep", "many": "a lot of sheep"})
        self.assertEqual(
            translation.as_native_string(),
            "{VAR_PLURAL, plural, =0 {no sheep} =1 {ein Schaf} other {Schafe} many {a lot of sheep}}"
        )

    def test_nested(self):
        message = self.parse("{n, plural, =0 {none} other {{g, select, male {he} other {they}}}}")
        other = message.get_icu_message().get_categories()[1].message
        self.assertTrue(other.is_icu_message())
        translation = message.translate_icu_message({"other": {"male": "er"}})
        self.assertEqual(
            translation.as_native_string(),
            "{VAR_PLURAL, plural, =0 {none} other {{VAR_SELECT, select, male {er} other {they}}}}"
        )

    def test_syntax_errors(self):
        from i18nsupport.errors import IcuSyntaxError, MessageSyntaxError

        for text in ("{n, plural, =0 {none}",
                     "{n, plural, =0 none}",
                     "{n, plural, =0 {none} =0 {again}}",
                     "{n, plural, =0 {none}} trailing"):
            with self.assertRaises(IcuSyntaxError, msg=text):
                self.parse(text)
        self.assertTrue(issubclass(IcuSyntaxError, MessageSyntaxError))

    def test_nesting_limit(self):
        import dataclasses

        from i18nsupport.errors import TooDeeplyNestedError

        dialect = dataclasses.replace(self.dialect, max_nesting_depth=1)
        text = "{a, plural, other {{b, plural, other {{c, plural, other {deep}}}}}}"
        with self.assertRaises(TooDeeplyNestedError):
            dialect.create_normalized_message_from_xml_string(text)


if __name__ == "__main__":
    unittest.main()
