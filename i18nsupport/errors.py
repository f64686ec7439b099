"""
Typed errors raised while parsing, translating and editing messages.

Validation findings are not errors, see validator.Validator.
"""
from typing import Optional


class TranslationMessagesError(Exception):
    """Base class of all errors raised by this package."""


class MessageSyntaxError(TranslationMessagesError):
    """Malformed canonical text, ICU syntax or native XML fragment."""

    def __init__(self, message: str, fragment: Optional[str] = None):
        if fragment is not None:
            message = f"{message} (in \"{fragment}\")"
        super().__init__(message)
        self.fragment = fragment


class LexError(MessageSyntaxError):
    pass


class IcuSyntaxError(MessageSyntaxError):
    pass


class InvalidPluralCategoryError(MessageSyntaxError):
    def __init__(self, category: str):
        super().__init__(
            f'invalid plural category "{category}", '
            f'allowed are =<n> and zero,one,two,few,many,other'
        )
        self.category = category


class StructuralError(TranslationMessagesError):
    """Unbalanced, unclosed or too deeply nested tags."""

    def __init__(self, message: str, tag_name: Optional[str] = None, native: Optional[str] = None):
        if native:
            message = f"{message} (in \"{native}\")"
        super().__init__(message)
        self.tag_name = tag_name
        self.native = native


class UnbalancedTagError(StructuralError):
    pass


class UnclosedTagError(StructuralError):
    pass


class UnexpectedCloseTagError(StructuralError):
    pass


class TooDeeplyNestedError(StructuralError):
    pass


class UnknownCategoryError(TranslationMessagesError):
    def __init__(self, category: str):
        super().__init__(
            f'adding a new category not allowed for select messages ("{category}" is not part of message)'
        )
        self.category = category


class UnknownStateError(TranslationMessagesError):
    def __init__(self, state: str):
        super().__init__(f'unknown state "{state}"')
        self.state = state


class DuplicateIdError(TranslationMessagesError):
    def __init__(self, unit_id: str, filename: Optional[str] = None):
        where = f" in file {filename}" if filename else ""
        super().__init__(f'tu with id "{unit_id}" already exists{where}')
        self.unit_id = unit_id


class UnsupportedOperationError(TranslationMessagesError):
    def __init__(self, message: str, dialect: Optional[str] = None):
        super().__init__(message)
        self.dialect = dialect


class IcuMessageMismatchError(UnsupportedOperationError):
    """translate() called on an ICU message or translate_icu_message() on a plain one."""


class InvalidFileError(TranslationMessagesError):
    def __init__(self, message: str, filename: Optional[str] = None):
        super().__init__(message)
        self.filename = filename
