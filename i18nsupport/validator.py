from typing import Dict, Iterable, List, Optional

from .message_parts import ParsedMessagePartType

ValidationErrors = Dict[str, str]

# Finding keys
PLACEHOLDER_ADDED = "placeholderAdded"
PLACEHOLDER_REMOVED = "placeholderRemoved"
ICU_MESSAGE_REF_ADDED = "icuMessageRefAdded"
ICU_MESSAGE_REF_REMOVED = "icuMessageRefRemoved"
TAG_ADDED = "tagAdded"
TAG_REMOVED = "tagRemoved"


def _ordered_unique(values: Iterable) -> List:
    seen = {}
    for value in values:
        seen.setdefault(value, None)
    return list(seen)


class Validator:
    """
    Compares a translated message with the message it was translated from.

    Errors are findings that break the rendering of the translation,
    warnings are worth a look but acceptable.
    Both return None if there is nothing to report.
    """

    def validate(self, message) -> Optional[ValidationErrors]:
        source = message.source_message
        if source is None:
            return None
        errors: ValidationErrors = {}

        added = self._missing_in(self.placeholders(message), self.placeholders(source))
        if added:
            errors[PLACEHOLDER_ADDED] = self._added_message("placeholder", added)

        removed_refs = self._missing_in(self.icu_message_refs(source), self.icu_message_refs(message))
        if removed_refs:
            errors[ICU_MESSAGE_REF_REMOVED] = self._removed_message("ICU message reference", removed_refs)

        added_refs = self._missing_in(self.icu_message_refs(message), self.icu_message_refs(source))
        if added_refs:
            errors[ICU_MESSAGE_REF_ADDED] = self._added_message("ICU message reference", added_refs)

        return errors or None

    def validate_warnings(self, message) -> Optional[ValidationErrors]:
        source = message.source_message
        if source is None:
            return None
        warnings: ValidationErrors = {}

        removed = self._missing_in(self.placeholders(source), self.placeholders(message))
        if removed:
            warnings[PLACEHOLDER_REMOVED] = self._removed_message("placeholder", removed)

        removed_tags = self._missing_in(self.tags(source), self.tags(message))
        if removed_tags:
            warnings[TAG_REMOVED] = self._removed_message("tag", [f"<{t}>" for t in removed_tags])

        added_tags = self._missing_in(self.tags(message), self.tags(source))
        if added_tags:
            warnings[TAG_ADDED] = self._added_message("tag", [f"<{t}>" for t in added_tags])

        return warnings or None

    @staticmethod
    def placeholders(message) -> List[int]:
        return _ordered_unique(
            p.index for p in message.parts() if p.type == ParsedMessagePartType.PLACEHOLDER
        )

    @staticmethod
    def icu_message_refs(message) -> List[int]:
        return _ordered_unique(
            p.index for p in message.parts() if p.type == ParsedMessagePartType.ICU_MESSAGE_REF
        )

    @staticmethod
    def tags(message) -> List[str]:
        """Names of start and empty tags, end tags are implied."""
        return _ordered_unique(
            p.tag_name for p in message.parts()
            if p.type in (ParsedMessagePartType.START_TAG, ParsedMessagePartType.EMPTY_TAG)
        )

    @staticmethod
    def _missing_in(values: List, other: List) -> List:
        other_set = set(other)
        return [v for v in values if v not in other_set]

    @staticmethod
    def _added_message(what: str, items: List) -> str:
        joined = ", ".join(str(i) for i in items)
        if len(items) == 1:
            return f"added {what} {joined}, which is not in original message"
        return f"added {what}s {joined}, which are not in original message"

    @staticmethod
    def _removed_message(what: str, items: List) -> str:
        joined = ", ".join(str(i) for i in items)
        if len(items) == 1:
            return f"removed {what} {joined} from original message"
        return f"removed {what}s {joined} from original message"
