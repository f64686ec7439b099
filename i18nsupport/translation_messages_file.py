"""
Base class of the translation files of all formats.
"""
import dataclasses
from typing import Callable, Iterator, List, Optional

from .config.app_config import AppConfig
from .constants import STATE_NEW, STATE_TRANSLATED
from .dom_utilities import (append_child, insert_after, insert_first, parse_xml_string,
                            remove_element, split_prolog)
from .errors import DuplicateIdError
from .logger import get_logger
from .xml_serializer import XmlSerializer

logger = get_logger(__name__)


class _InsertAtEnd:
    def __repr__(self):
        return "INSERT_AT_END"


# default position of import_new_trans_unit(), None means at the start
INSERT_AT_END = _InsertAtEnd()


class AbstractTranslationMessagesFile:
    """
    A parsed translation file (XLIFF 1.2, XLIFF 2.0, XMB or XTB).

    The units are created on first access. Edits go to the xml tree,
    edited_content() returns the changed file.
    """

    def __init__(self, xml_string: str, path: Optional[str], encoding: Optional[str],
                 config: Optional[AppConfig] = None):
        if xml_string is None:
            raise ValueError(f"no content for file {path}")
        self._filename = path
        self._encoding = encoding
        self._file_ends_with_eol = xml_string.endswith("\n")
        self._prolog = split_prolog(xml_string)
        self._root = parse_xml_string(xml_string, path)
        self._warnings: List[str] = []
        self._trans_units = None
        self._number_of_trans_units_without_id = 0
        self._number_of_untranslated_trans_units = 0
        self._number_of_reviewed_trans_units = 0
        self._target_prefix = ""
        self._target_suffix = ""
        self._message_dialect = self.base_message_dialect()
        self._config = AppConfig()
        self.apply_config(config or AppConfig())
        self.init_document()

    # format specific parts

    def i18n_format(self) -> str:
        raise NotImplementedError

    def file_type(self) -> str:
        raise NotImplementedError

    def base_message_dialect(self):
        raise NotImplementedError

    def init_document(self):
        """Check the root element, raise InvalidFileError if it is not the expected format."""

    def init_trans_units(self) -> list:
        raise NotImplementedError

    def trans_unit_container(self):
        """Element new units are added to."""
        raise NotImplementedError

    def element_names_for_mixed_content(self):
        return self._message_dialect.mixed_content_elements

    def source_language(self) -> Optional[str]:
        raise NotImplementedError

    def set_source_language(self, language: str):
        raise NotImplementedError

    def target_language(self) -> Optional[str]:
        raise NotImplementedError

    def set_target_language(self, language: str):
        raise NotImplementedError

    def create_translation_file_for_lang(self, lang: str, filename: str, is_default_lang: bool,
                                         copy_content: bool) -> "AbstractTranslationMessagesFile":
        raise NotImplementedError

    # common parts

    def apply_config(self, config: AppConfig):
        self._config = config
        self._target_prefix = config.new_trans_unit_target_prefix
        self._target_suffix = config.new_trans_unit_target_suffix
        if config.max_nesting_depth != self._message_dialect.max_nesting_depth:
            self._message_dialect = dataclasses.replace(self._message_dialect,
                                                        max_nesting_depth=config.max_nesting_depth)

    def config(self) -> AppConfig:
        return self._config

    def message_dialect(self):
        return self._message_dialect

    def filename(self) -> Optional[str]:
        return self._filename

    def encoding(self) -> Optional[str]:
        return self._encoding

    def warnings(self) -> List[str]:
        self._lazy_initialize_trans_units()
        return list(self._warnings)

    def _lazy_initialize_trans_units(self):
        if self._trans_units is None:
            self._trans_units = []
            self._warnings = []
            self._trans_units = self.init_trans_units()
            logger.debug(f"{self.file_type()} file {self._filename}: {len(self._trans_units)} trans-units")
            self.count_numbers()

    def add_warning(self, warning: str):
        logger.warning(warning)
        self._warnings.append(warning)

    def count_numbers(self):
        self._lazy_initialize_trans_units()
        without_id = 0
        untranslated = 0
        reviewed = 0
        for unit in self._trans_units:
            if not unit.id:
                without_id += 1
            state = unit.target_state()
            if state is None or state == STATE_NEW:
                untranslated += 1
            if state == STATE_TRANSLATED:
                reviewed += 1
        self._number_of_trans_units_without_id = without_id
        self._number_of_untranslated_trans_units = untranslated
        self._number_of_reviewed_trans_units = reviewed

    def number_of_trans_units(self) -> int:
        self._lazy_initialize_trans_units()
        return len(self._trans_units)

    def number_of_trans_units_without_id(self) -> int:
        self._lazy_initialize_trans_units()
        return self._number_of_trans_units_without_id

    def number_of_untranslated_trans_units(self) -> int:
        self._lazy_initialize_trans_units()
        return self._number_of_untranslated_trans_units

    def number_of_reviewed_trans_units(self) -> int:
        """Units with state translated (translated, waiting for review)."""
        self._lazy_initialize_trans_units()
        return self._number_of_reviewed_trans_units

    def trans_units(self) -> list:
        self._lazy_initialize_trans_units()
        return list(self._trans_units)

    def __iter__(self) -> Iterator:
        return iter(self.trans_units())

    def __len__(self) -> int:
        return self.number_of_trans_units()

    def for_each_trans_unit(self, callback: Callable):
        for unit in self.trans_units():
            callback(unit)

    def trans_unit_with_id(self, unit_id: str):
        self._lazy_initialize_trans_units()
        for unit in self._trans_units:
            if unit.id == unit_id:
                return unit
        return None

    def remove_trans_unit_with_id(self, unit_id: str):
        unit = self.trans_unit_with_id(unit_id)
        if unit is None:
            logger.debug(f"no trans-unit {unit_id} to remove in {self._filename}")
            return
        remove_element(unit.as_xml_element())
        self._trans_units = [u for u in self._trans_units if u is not unit]
        self.count_numbers()

    def new_trans_unit_target_prefix(self) -> str:
        return self._target_prefix

    def set_new_trans_unit_target_prefix(self, prefix: Optional[str]):
        self._target_prefix = prefix or ""

    def new_trans_unit_target_suffix(self) -> str:
        return self._target_suffix

    def set_new_trans_unit_target_suffix(self, suffix: Optional[str]):
        self._target_suffix = suffix or ""

    def import_new_trans_unit(self, foreign_trans_unit, is_default_lang: bool, copy_content: bool,
                              import_after=INSERT_AT_END):
        """
        Copy a unit of another file into this one.

        The target gets the source if copy_content is set (or this is the default
        language), the state is final for the default language, new otherwise.
        import_after: an existing unit of this file, None for the start of the
        file, INSERT_AT_END (default) for the end.
        """
        if self.trans_unit_with_id(foreign_trans_unit.id) is not None:
            raise DuplicateIdError(foreign_trans_unit.id, self._filename)
        new_unit = foreign_trans_unit.clone_with_source_as_target(is_default_lang, copy_content, self)
        element = new_unit.as_xml_element()
        if import_after is INSERT_AT_END or (import_after is not None and import_after not in self._trans_units):
            if import_after is not INSERT_AT_END:
                logger.warning(f"{import_after} is not part of {self._filename}, adding {new_unit.id} at the end")
            append_child(self.trans_unit_container(), element)
            self._trans_units.append(new_unit)
        elif import_after is None:
            insert_first(self.trans_unit_container(), element)
            self._trans_units.insert(0, new_unit)
        else:
            insert_after(element, import_after.as_xml_element())
            self._trans_units.insert(self._trans_units.index(import_after) + 1, new_unit)
        self.count_numbers()
        return new_unit

    def edited_content(self, beautify_output: Optional[bool] = None) -> str:
        """The file content including all changes."""
        options = self._config.serializer_options(self.element_names_for_mixed_content(), beautify_output)
        result = XmlSerializer().serialize_to_string(self._root, options, prolog=self._prolog)
        if self._file_ends_with_eol and not result.endswith("\n"):
            result += "\n"
        return result

    def __repr__(self):
        return f"{type(self).__name__}({self._filename!r})"
