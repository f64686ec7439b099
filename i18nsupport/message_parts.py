from dataclasses import dataclass
from typing import Any, Optional

from .constants import NORMALIZATION_FORMAT_NGXTRANSLATE


class ParsedMessagePartType:
    TEXT = "TEXT"
    PLACEHOLDER = "PLACEHOLDER"
    START_TAG = "START_TAG"
    END_TAG = "END_TAG"
    EMPTY_TAG = "EMPTY_TAG"
    ICU_MESSAGE = "ICU_MESSAGE"
    ICU_MESSAGE_REF = "ICU_MESSAGE_REF"


@dataclass(frozen=True)
class TextPart:
    text: str
    type = ParsedMessagePartType.TEXT

    def as_display_string(self, display_format: Optional[str] = None) -> str:
        return self.text


@dataclass(frozen=True)
class PlaceholderPart:
    """An interpolation, e.g. {{0}}. disp is the original expression, if known."""
    index: int
    disp: Optional[str] = None
    type = ParsedMessagePartType.PLACEHOLDER

    def as_display_string(self, display_format: Optional[str] = None) -> str:
        return "{{" + str(self.index) + "}}"


@dataclass(frozen=True)
class StartTagPart:
    tag_name: str
    id_counter: int = 0
    type = ParsedMessagePartType.START_TAG

    def as_display_string(self, display_format: Optional[str] = None) -> str:
        if display_format == NORMALIZATION_FORMAT_NGXTRANSLATE:
            return ""
        if self.id_counter == 0:
            return f"<{self.tag_name}>"
        return f'<{self.tag_name} id="{self.id_counter}">'


@dataclass(frozen=True)
class EndTagPart:
    tag_name: str
    type = ParsedMessagePartType.END_TAG

    def as_display_string(self, display_format: Optional[str] = None) -> str:
        if display_format == NORMALIZATION_FORMAT_NGXTRANSLATE:
            return ""
        return f"</{self.tag_name}>"


@dataclass(frozen=True)
class EmptyTagPart:
    tag_name: str
    id_counter: int = 0
    type = ParsedMessagePartType.EMPTY_TAG

    def as_display_string(self, display_format: Optional[str] = None) -> str:
        if display_format == NORMALIZATION_FORMAT_NGXTRANSLATE:
            return ""
        if self.id_counter == 0:
            return f"<{self.tag_name}/>"
        return f'<{self.tag_name} id="{self.id_counter}"/>'


@dataclass(frozen=True)
class IcuMessageRefPart:
    index: int
    disp: Optional[str] = None
    type = ParsedMessagePartType.ICU_MESSAGE_REF

    def as_display_string(self, display_format: Optional[str] = None) -> str:
        return f"<ICU-Message-Ref_{self.index}/>"


@dataclass(frozen=True)
class IcuMessagePart:
    # icu_message.IcuMessage
    icu_message: Any
    type = ParsedMessagePartType.ICU_MESSAGE

    def as_display_string(self, display_format: Optional[str] = None) -> str:
        return "<ICU-Message/>"
