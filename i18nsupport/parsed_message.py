"""
Normalized (dialect independent) representation of a translatable message.
"""
from typing import Dict, List, Optional, Union

from .constants import DEFAULT_MAX_NESTING_DEPTH, NORMALIZATION_FORMAT_DEFAULT
from .errors import (IcuMessageMismatchError, TooDeeplyNestedError, UnbalancedTagError,
                     UnclosedTagError)
from .message_parts import (EmptyTagPart, EndTagPart, IcuMessagePart, IcuMessageRefPart,
                            ParsedMessagePartType, PlaceholderPart, StartTagPart, TextPart)
from .validator import ValidationErrors, Validator
from .xml_serializer import XmlSerializer

IcuTranslation = Dict[str, Union[str, "IcuTranslation"]]


class ParsedMessage:
    """
    An ordered list of message parts, created by a dialect (see message_parser).

    The parts are fixed once the message is built. The native xml is derived
    from the parts on first use and cached.
    """

    def __init__(self, dialect, parts, source_message: Optional["ParsedMessage"] = None):
        self._dialect = dialect
        self._parts = tuple(parts)
        self._source_message = source_message
        self._native_xml = None

    @property
    def dialect(self):
        return self._dialect

    @property
    def source_message(self) -> Optional["ParsedMessage"]:
        return self._source_message

    def parts(self) -> List:
        return list(self._parts)

    def as_display_string(self, display_format: str = NORMALIZATION_FORMAT_DEFAULT) -> str:
        return "".join(part.as_display_string(display_format) for part in self._parts)

    def native_xml(self):
        """The message as native xml, wrapped in a <fragment> element."""
        if self._native_xml is None:
            self._native_xml = self._dialect.build_native(self)
        return self._native_xml

    def as_native_string(self) -> str:
        icu_message = self.get_icu_message()
        if icu_message is not None:
            return icu_message.as_native_string()
        return XmlSerializer().serialize_content(self.native_xml())

    def get_icu_message(self):
        if len(self._parts) == 1 and self._parts[0].type == ParsedMessagePartType.ICU_MESSAGE:
            return self._parts[0].icu_message
        return None

    def is_icu_message(self) -> bool:
        return self.get_icu_message() is not None

    def contains_icu_message_ref(self) -> bool:
        return any(part.type == ParsedMessagePartType.ICU_MESSAGE_REF for part in self._parts)

    def translate(self, normalized_string: str) -> "ParsedMessage":
        """
        New message parsed from normalized_string with self as its source.
        Use translate_icu_message() for ICU messages.
        """
        if self.is_icu_message():
            raise IcuMessageMismatchError(
                f'cannot translate ICU message with simple string, use translate_icu_message() instead '
                f'("{normalized_string}", "{self.as_native_string()}")',
                self._dialect.name,
            )
        return self._dialect.parse_normalized_string(normalized_string, self)

    def translate_icu_message(self, icu_translation: IcuTranslation) -> "ParsedMessage":
        """
        Translate the categories of an ICU message.
        icu_translation maps category names to normalized strings
        (or to nested translations for categories holding an ICU message).
        """
        icu_message = self.get_icu_message()
        if icu_message is None:
            raise IcuMessageMismatchError(
                f'this is not an ICU message, use translate() instead ("{self.as_native_string()}")',
                self._dialect.name,
            )
        translated = icu_message.translate(icu_translation)
        return ParsedMessage(self._dialect, [IcuMessagePart(translated)], self)

    def translate_native_string(self, native_string: str) -> "ParsedMessage":
        """New message parsed from native xml with self as its source."""
        return self._dialect.create_normalized_message_from_xml_string(native_string, self)

    def validate(self) -> Optional[ValidationErrors]:
        return Validator().validate(self)

    def validate_warnings(self) -> Optional[ValidationErrors]:
        return Validator().validate_warnings(self)

    def placeholder_disp(self, index: int) -> Optional[str]:
        for part in self._parts:
            if part.type == ParsedMessagePartType.PLACEHOLDER and part.index == index:
                return part.disp
        return None

    def icu_message_ref_disp(self, index: int) -> Optional[str]:
        for part in self._parts:
            if part.type == ParsedMessagePartType.ICU_MESSAGE_REF and part.index == index:
                return part.disp
        return None

    def __str__(self):
        return self.as_display_string()

    def __repr__(self):
        return f"ParsedMessage({self._dialect.name}, {self.as_display_string()!r})"


class MessageBuilder:
    """
    Collects parts for a new ParsedMessage and checks that tags are balanced.
    """

    def __init__(self, dialect, source_message: Optional[ParsedMessage] = None,
                 native: Optional[str] = None, max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH):
        self.dialect = dialect
        self.source_message = source_message
        # the string being parsed, for error messages
        self.native = native
        self.max_nesting_depth = max_nesting_depth
        self._parts: List = []
        self._open_tags: List[str] = []

    def add_text(self, text: str):
        if not text:
            return
        if self._parts and self._parts[-1].type == ParsedMessagePartType.TEXT:
            self._parts[-1] = TextPart(self._parts[-1].text + text)
        else:
            self._parts.append(TextPart(text))

    def add_placeholder(self, index: int, disp: Optional[str] = None):
        self._parts.append(PlaceholderPart(index, disp))

    def add_icu_message_ref(self, index: int, disp: Optional[str] = None):
        self._parts.append(IcuMessageRefPart(index, disp))

    def add_start_tag(self, tag_name: str, id_counter: int = 0):
        if len(self._open_tags) >= self.max_nesting_depth:
            raise TooDeeplyNestedError(
                f"tags nested deeper than {self.max_nesting_depth} levels", tag_name, self.native
            )
        self._open_tags.append(tag_name)
        self._parts.append(StartTagPart(tag_name, id_counter))

    def add_end_tag(self, tag_name: str):
        if not self._open_tags:
            raise UnbalancedTagError(f"unexpected close tag {tag_name}, no tag is open", tag_name, self.native)
        open_tag = self._open_tags[-1]
        if open_tag != tag_name:
            raise UnbalancedTagError(
                f"unexpected close tag {tag_name}, open tag is {open_tag}", tag_name, self.native
            )
        self._open_tags.pop()
        self._parts.append(EndTagPart(tag_name))

    def add_empty_tag(self, tag_name: str, id_counter: int = 0):
        self._parts.append(EmptyTagPart(tag_name, id_counter))

    def set_icu_message(self, icu_message):
        """An ICU message is always the only part of a message."""
        self._parts = [IcuMessagePart(icu_message)]

    def build(self) -> ParsedMessage:
        if self._open_tags:
            tag_name = self._open_tags[-1]
            raise UnclosedTagError(f"missing close tag for {tag_name}", tag_name, self.native)
        return ParsedMessage(self.dialect, self._parts, self.source_message)
