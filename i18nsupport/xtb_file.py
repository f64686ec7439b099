"""
XTB files, the translations belonging to an XMB master.

    <translationbundle lang="de">
      <translation id="...">Eintrag <ph name="INTERPOLATION"/> von <ph name="INTERPOLATION_1"/> hinzugefügt.</translation>
    </translationbundle>

Source content, source references, description and meaning are not part of
the file, they are read from the master (if one is given).
"""
import copy
from dataclasses import dataclass
from typing import List, Optional, Union

from .config.app_config import AppConfig
from .constants import FILETYPE_XTB, FORMAT_XTB
from .dom_utilities import find_descendants, get_xml_content, local_name, set_xml_content
from .errors import InvalidFileError
from .trans_unit import AbstractTransUnit, SourceReference
from .translation_messages_file import AbstractTranslationMessagesFile
from .xmb_file import XmbFile, XmbTransUnit
from .xtb_message_parser import XTB_MESSAGE_DIALECT

STATE_NATIVE_NEW = "new"
STATE_NATIVE_FINAL = "final"


@dataclass
class MasterFileContent:
    """Raw content of the XMB master of an XTB file."""
    xml_content: str
    path: Optional[str] = None
    encoding: Optional[str] = None


class XtbTransUnit(AbstractTransUnit):

    def __init__(self, element, unit_id: Optional[str], translation_messages_file,
                 source_trans_unit_from_master: Optional[XmbTransUnit] = None):
        super().__init__(element, unit_id, translation_messages_file)
        self._master_unit = source_trans_unit_from_master

    def source_trans_unit_from_master(self) -> Optional[XmbTransUnit]:
        return self._master_unit

    def source_content(self) -> Optional[str]:
        if self._master_unit is None:
            return None
        return self._master_unit.source_content()

    def supports_set_source_content(self) -> bool:
        return False

    def set_source_content(self, new_content: str):
        # the source lives in the master
        pass

    def create_source_content_normalized(self):
        if self._master_unit is None:
            return None
        # parsed with the xtb dialect, so translations come out as xtb content
        return self.message_dialect().create_normalized_message_from_xml(self._master_unit.as_xml_element())

    def target_content(self) -> str:
        return get_xml_content(self._element)

    def target_content_normalized(self):
        return self.message_dialect().create_normalized_message_from_xml(self._element, self.source_content_normalized())

    def native_target_state(self) -> Optional[str]:
        """
        XTB has no state attribute: new if nothing is translated yet
        (empty target or target same as source), final otherwise.
        Without master there is no way to tell.
        """
        if self._master_unit is None:
            return None
        target = self.target_content()
        if not self._master_unit.source_content() or not target:
            return STATE_NATIVE_NEW
        if target == self._master_unit.source_content_as_xtb():
            return STATE_NATIVE_NEW
        source = self.source_content_normalized()
        if not source.is_icu_message() \
                and source.as_display_string() == self.target_content_normalized().as_display_string():
            return STATE_NATIVE_NEW
        return STATE_NATIVE_FINAL

    def set_native_target_state(self, native_state: str):
        # the state follows from the content
        pass

    def source_references(self) -> List[SourceReference]:
        if self._master_unit is None:
            return []
        return self._master_unit.source_references()

    def supports_set_source_references(self) -> bool:
        return False

    def description(self) -> Optional[str]:
        return self._master_unit.description() if self._master_unit is not None else None

    def meaning(self) -> Optional[str]:
        return self._master_unit.meaning() if self._master_unit is not None else None

    def supports_set_description_and_meaning(self) -> bool:
        return False

    def translate_native(self, native_translation: str):
        set_xml_content(self._element, native_translation or "")

    def clone_with_source_as_target(self, is_default_lang: bool, copy_content: bool, target_file):
        element = copy.deepcopy(self._element)
        element.tail = None
        clone = XtbTransUnit(element, self._id, target_file, self._master_unit)
        clone.use_source_as_target(is_default_lang, copy_content)
        return clone

    def use_source_as_target(self, is_default_lang: bool, copy_content: bool):
        if self._master_unit is None:
            return
        self.translate_native(self.new_target_content(self._master_unit.source_content_as_xtb(),
                                                      is_default_lang, copy_content))


class XtbFile(AbstractTranslationMessagesFile):

    def __init__(self, xml_string: str, path: Optional[str], encoding: Optional[str],
                 optional_master: Union[XmbFile, MasterFileContent, None] = None,
                 config: Optional[AppConfig] = None):
        if isinstance(optional_master, MasterFileContent):
            optional_master = XmbFile(optional_master.xml_content, optional_master.path,
                                      optional_master.encoding, config)
        self._master_file: Optional[XmbFile] = optional_master
        super().__init__(xml_string, path, encoding, config)

    def i18n_format(self) -> str:
        return FORMAT_XTB

    def file_type(self) -> str:
        return FILETYPE_XTB

    def base_message_dialect(self):
        return XTB_MESSAGE_DIALECT

    def master_file(self) -> Optional[XmbFile]:
        return self._master_file

    def init_document(self):
        if local_name(self._root) != "translationbundle":
            raise InvalidFileError(
                f'File "{self._filename}" seems to be no xtb file (should contain a translationbundle element)',
                self._filename,
            )

    def init_trans_units(self) -> list:
        units = []
        missing_in_master = []
        for element in find_descendants(self._root, "translation"):
            unit_id = element.get("id")
            if not unit_id:
                self.add_warning(f'oops, msg without "id" found in master, please check file {self._filename}')
            master_unit = None
            if self._master_file is not None and unit_id:
                master_unit = self._master_file.trans_unit_with_id(unit_id)
                if master_unit is None:
                    missing_in_master.append(unit_id)
            units.append(XtbTransUnit(element, unit_id, self, master_unit))
        if missing_in_master:
            self.add_warning(
                f'{len(missing_in_master)} translations of {self._filename} are not part of master '
                f'{self._master_file.filename()} (first one is "{missing_in_master[0]}"). '
                f'Check if it is the correct master'
            )
        return units

    def trans_unit_container(self):
        return self._root

    def source_language(self) -> Optional[str]:
        if self._master_file is None:
            return None
        return self._master_file.source_language()

    def set_source_language(self, language: str):
        # the source language is a property of the master
        pass

    def target_language(self) -> Optional[str]:
        return self._root.get("lang")

    def set_target_language(self, language: str):
        self._root.set("lang", language)

    def create_translation_file_for_lang(self, lang: str, filename: str, is_default_lang: bool,
                                         copy_content: bool) -> "XtbFile":
        translation_file = XtbFile(self.edited_content(False), filename, self._encoding,
                                   self._master_file, self._config)
        translation_file.set_new_trans_unit_target_prefix(self._target_prefix)
        translation_file.set_new_trans_unit_target_suffix(self._target_suffix)
        translation_file.set_target_language(lang)
        for unit in translation_file:
            unit.use_source_as_target(is_default_lang, copy_content)
        translation_file.count_numbers()
        return translation_file
