"""
ICU plural and select messages, e.g.

    {n, plural, =0 {no sheep} =1 {one sheep} other {<b>many</b> sheep}}

The category bodies are native xml of the dialect the message was found in.
Inside a body '{' and '}' escape literal braces and '' a literal apostrophe.
"""
import re
from dataclasses import dataclass
from typing import Any, List, Optional

from .errors import (IcuMessageMismatchError, IcuSyntaxError, InvalidPluralCategoryError,
                     TooDeeplyNestedError, UnknownCategoryError)
from .logger import get_logger
from .xml_serializer import XmlSerializer

logger = get_logger(__name__)

ICU_MESSAGE_START = re.compile(r"^\s*\{\s*[^\s,{}]+\s*,\s*(plural|select)\s*,")
PLURAL_KEYWORDS = ("zero", "one", "two", "few", "many", "other")
_EXACT_VALUE_CATEGORY = re.compile(r"=\d+")
# an xml tag, attribute values may contain > and braces
_XML_TAG = re.compile(r"<(?:[^>\"']|\"[^\"]*\"|'[^']*')*>")
_ESCAPED = re.compile(r"'([{}])'|''")
_NEEDS_ESCAPE = re.compile(r"'(?=[{}'])|[{}]")
_CATEGORY_NAME = re.compile(r"[^\s{}]+")
_VARIABLE_NAME = re.compile(r"[^\s,{}]+")
_WHITESPACE = re.compile(r"\s*")

VAR_PLURAL = "VAR_PLURAL"
VAR_SELECT = "VAR_SELECT"


def is_icu_message_start(text: Optional[str]) -> bool:
    """True if text starts like {var, plural, ... or {var, select, ..."""
    return bool(text) and ICU_MESSAGE_START.match(text) is not None


def is_valid_plural_category(category: str) -> bool:
    return category in PLURAL_KEYWORDS or _EXACT_VALUE_CATEGORY.fullmatch(category) is not None


def unescape_icu_text(text: str) -> str:
    return _ESCAPED.sub(lambda m: m.group(1) or "'", text)


def escape_icu_text(text: str) -> str:
    return _NEEDS_ESCAPE.sub(lambda m: "''" if m.group(0) == "'" else f"'{m.group(0)}'", text)


@dataclass
class IcuMessageCategory:
    category: str
    # parsed_message.ParsedMessage
    message: Any


class IcuMessage:

    def __init__(self, dialect, is_plural: bool):
        self._dialect = dialect
        self._is_plural = is_plural
        self._categories: List[IcuMessageCategory] = []

    def add_category(self, category: str, message):
        for existing in self._categories:
            if existing.category == category:
                raise IcuSyntaxError(f'duplicate category "{category}"')
        self._categories.append(IcuMessageCategory(category, message))

    def get_categories(self) -> List[IcuMessageCategory]:
        return list(self._categories)

    def is_plural_message(self) -> bool:
        return self._is_plural

    def is_select_message(self) -> bool:
        return not self._is_plural

    def as_native_string(self) -> str:
        serializer = XmlSerializer()
        variable, kind = (VAR_PLURAL, "plural") if self._is_plural else (VAR_SELECT, "select")
        bodies = []
        for category in self._categories:
            nested = category.message.get_icu_message()
            if nested is not None:
                body = nested.as_native_string()
            else:
                body = serializer.serialize_content(category.message.native_xml(), text_filter=escape_icu_text)
            bodies.append(f"{category.category} {{{body}}}")
        return f"{{{variable}, {kind}, {' '.join(bodies)}}}"

    def translate(self, translation) -> "IcuMessage":
        """
        New ICU message with the categories found in translation translated.

        Categories missing in translation keep their original text.
        Plural messages may get new categories (=<n> or a plural keyword),
        select messages may not.
        """
        known = {category.category for category in self._categories}
        for category in translation:
            if category in known:
                continue
            if self.is_select_message():
                raise UnknownCategoryError(category)
            if not is_valid_plural_category(category):
                raise InvalidPluralCategoryError(category)

        result = IcuMessage(self._dialect, self._is_plural)
        for category in self._categories:
            value = translation.get(category.category)
            if value is None:
                result.add_category(category.category, category.message)
            elif isinstance(value, dict):
                result.add_category(category.category, category.message.translate_icu_message(value))
            else:
                result.add_category(category.category, category.message.translate(value))
        for category, value in translation.items():
            if category in known or value is None:
                continue
            if isinstance(value, dict):
                raise IcuMessageMismatchError(
                    f'new category "{category}" cannot hold a nested ICU translation', self._dialect.name
                )
            logger.debug(f"adding new plural category {category}")
            result.add_category(category, self._dialect.parse_normalized_string(value, None))
        return result


class IcuMessageParser:
    """
    Recursive descent parser for {var, plural|select, (category {body})+}.

    parse_body(raw_body, depth) turns a category body into a ParsedMessage.
    """

    def __init__(self, parse_body, max_nesting_depth: int):
        self.parse_body = parse_body
        self.max_nesting_depth = max_nesting_depth

    def parse(self, dialect, text: str, depth: int = 0) -> IcuMessage:
        if depth > self.max_nesting_depth:
            raise TooDeeplyNestedError(f"ICU messages nested deeper than {self.max_nesting_depth} levels",
                                       native=text)
        pos = self._expect(text, _skip(text, 0), "{")
        match = _VARIABLE_NAME.match(text, _skip(text, pos))
        if not match:
            raise IcuSyntaxError("expected variable name", text)
        pos = self._expect(text, _skip(text, match.end()), ",")
        pos = _skip(text, pos)
        if text.startswith("plural", pos):
            is_plural = True
            pos += len("plural")
        elif text.startswith("select", pos):
            is_plural = False
            pos += len("select")
        else:
            raise IcuSyntaxError("expected plural or select", text)
        pos = self._expect(text, _skip(text, pos), ",")

        message = IcuMessage(dialect, is_plural)
        while True:
            pos = _skip(text, pos)
            if pos >= len(text):
                raise IcuSyntaxError("unexpected end of ICU message, missing }", text)
            if text[pos] == "}":
                pos += 1
                break
            match = _CATEGORY_NAME.match(text, pos)
            if not match:
                raise IcuSyntaxError(f'expected category at position {pos}', text)
            category = match.group(0)
            pos = self._expect(text, _skip(text, match.end()), "{")
            body, pos = self._read_body(text, pos)
            message.add_category(category, self.parse_body(body, depth + 1))
        if not message.get_categories():
            raise IcuSyntaxError("ICU message without categories", text)
        if text[pos:].strip():
            raise IcuSyntaxError(f'unexpected text "{text[pos:].strip()}" after ICU message', text)
        return message

    @staticmethod
    def _expect(text: str, pos: int, char: str) -> int:
        if not text.startswith(char, pos):
            found = text[pos:pos + 10] or "end of text"
            raise IcuSyntaxError(f'expected "{char}" but found "{found}"', text)
        return pos + 1

    @staticmethod
    def _read_body(text: str, start: int):
        """The raw body starting at start (behind the {) and the position behind its closing }."""
        depth = 1
        pos = start
        while pos < len(text):
            char = text[pos]
            if char == "'":
                if text.startswith("''", pos):
                    pos += 2
                    continue
                if text[pos + 1:pos + 3] in ("{'", "}'"):
                    pos += 3
                    continue
            elif char == "<":
                tag = _XML_TAG.match(text, pos)
                if tag:
                    pos = tag.end()
                    continue
            elif char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    return text[start:pos], pos + 1
            pos += 1
        raise IcuSyntaxError("unterminated category, missing }", text)


def _skip(text: str, pos: int) -> int:
    return _WHITESPACE.match(text, pos).end()
