"""
Base class of the translation units of all formats.
"""
from dataclasses import dataclass
from typing import List, Optional, Union

from .constants import STATE_FINAL, STATE_NEW, STATE_TRANSLATED
from .errors import UnknownStateError, UnsupportedOperationError
from .icu_message import is_icu_message_start
from .logger import get_logger
from .parsed_message import ParsedMessage
from .xml_serializer import escape_text

logger = get_logger(__name__)


@dataclass
class SourceReference:
    """Position of a message in the template it was extracted from."""
    sourcefile: str
    linenumber: int


@dataclass
class Note:
    text: str
    from_: Optional[str] = None


def parse_source_reference(location: str) -> Optional[SourceReference]:
    """'src/app/app.component.ts:10' (or ':10,12') -> SourceReference"""
    if not location:
        return None
    sourcefile, sep, lines = location.strip().rpartition(":")
    if not sep:
        return SourceReference(location.strip(), 0)
    first_line = lines.split(",")[0].strip()
    try:
        return SourceReference(sourcefile, int(first_line))
    except ValueError:
        logger.debug(f"no line number in source reference {location}")
        return SourceReference(location.strip(), 0)


class AbstractTransUnit:
    """
    One message of a translation file, backed by its native xml element.

    Subclasses implement the format specific parts (where source and target
    live, how states are stored).
    """

    def __init__(self, element, unit_id: Optional[str], translation_messages_file):
        self._element = element
        self._id = unit_id
        self._translation_messages_file = translation_messages_file
        self._source_content_normalized: Optional[ParsedMessage] = None

    @property
    def id(self) -> Optional[str]:
        return self._id

    def translation_messages_file(self):
        return self._translation_messages_file

    def as_xml_element(self):
        return self._element

    def message_dialect(self):
        return self._translation_messages_file.message_dialect()

    def source_content(self) -> Optional[str]:
        raise NotImplementedError

    def supports_set_source_content(self) -> bool:
        return True

    def set_source_content(self, new_content: str):
        raise NotImplementedError

    def source_content_normalized(self) -> Optional[ParsedMessage]:
        if self._source_content_normalized is None:
            self._source_content_normalized = self.create_source_content_normalized()
        return self._source_content_normalized

    def create_source_content_normalized(self) -> Optional[ParsedMessage]:
        raise NotImplementedError

    def target_content(self) -> Optional[str]:
        raise NotImplementedError

    def target_content_normalized(self) -> Optional[ParsedMessage]:
        raise NotImplementedError

    def native_target_state(self) -> Optional[str]:
        raise NotImplementedError

    def target_state(self) -> Optional[str]:
        """new, translated or final (None if the format has no state)."""
        native_state = self.native_target_state()
        if native_state is None:
            return None
        return self.map_native_state_to_state(native_state)

    def set_target_state(self, state: str):
        self.set_native_target_state(self.map_state_to_native_state(state))
        self._translation_messages_file.count_numbers()

    def map_state_to_native_state(self, state: str) -> str:
        if state not in (STATE_NEW, STATE_TRANSLATED, STATE_FINAL):
            raise UnknownStateError(state)
        return state

    def map_native_state_to_state(self, native_state: str) -> str:
        return native_state

    def set_native_target_state(self, native_state: str):
        raise NotImplementedError

    def source_references(self) -> List[SourceReference]:
        return []

    def supports_set_source_references(self) -> bool:
        return True

    def set_source_references(self, source_references: List[SourceReference]):
        pass

    def description(self) -> Optional[str]:
        return None

    def meaning(self) -> Optional[str]:
        return None

    def supports_set_description_and_meaning(self) -> bool:
        return True

    def set_description(self, description: Optional[str]):
        pass

    def set_meaning(self, meaning: Optional[str]):
        pass

    def notes(self) -> List[Note]:
        """Notes other than description and meaning."""
        return []

    def supports_set_notes(self) -> bool:
        return False

    def set_notes(self, notes: List[Note]):
        pass

    def translate(self, translation: Union[str, ParsedMessage]):
        """
        Set the target, translation is either a normalized string
        (see ParsedMessage.as_display_string) or a ParsedMessage.
        State changes to translated.
        """
        if isinstance(translation, ParsedMessage):
            message = translation
        else:
            source = self.source_content_normalized()
            if source is None:
                raise UnsupportedOperationError(
                    f"trans-unit {self._id} has no source, translate with a ParsedMessage or translate_native()",
                    self.message_dialect().name,
                )
            message = source.translate(translation)
        self.translate_native(message.as_native_string())
        self.set_target_state(STATE_TRANSLATED)

    def translate_native(self, native_translation: str):
        raise NotImplementedError

    def is_icu_message(self, native_content: Optional[str]) -> bool:
        return is_icu_message_start(native_content)

    def clone_with_source_as_target(self, is_default_lang: bool, copy_content: bool, target_file):
        """Copy of this unit for target_file, with the source copied to the target."""
        raise NotImplementedError

    def use_source_as_target(self, is_default_lang: bool, copy_content: bool):
        raise NotImplementedError

    def new_target_content(self, native_source: str, is_default_lang: bool, copy_content: bool) -> str:
        """
        Target for a unit created from its source.
        Empty unless copy_content or the default language, prefix/suffix only for non ICU translations.
        """
        if not (is_default_lang or copy_content):
            return ""
        if self.is_icu_message(native_source):
            return native_source
        messages_file = self._translation_messages_file
        return (escape_text(messages_file.new_trans_unit_target_prefix())
                + native_source
                + escape_text(messages_file.new_trans_unit_target_suffix()))

    def new_target_state(self, is_default_lang: bool) -> str:
        return self.map_state_to_native_state(STATE_FINAL if is_default_lang else STATE_NEW)

    def __repr__(self):
        return f"{type(self).__name__}({self._id!r})"
