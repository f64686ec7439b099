"""
Entry point for reading translation files of any supported format.
"""
import re
from typing import Optional

from .config.app_config import AppConfig
from .constants import FORMAT_XLIFF12, FORMAT_XLIFF20, FORMAT_XMB, FORMAT_XTB
from .errors import InvalidFileError
from .logger import get_logger
from .translation_messages_file import AbstractTranslationMessagesFile
from .xliff2_file import Xliff2File
from .xliff_file import XliffFile
from .xmb_file import XmbFile
from .xtb_file import MasterFileContent, XtbFile

logger = get_logger(__name__)

_XLIFF_VERSION = re.compile(r"<xliff\b[^>]*\bversion\s*=\s*[\"']([^\"']*)[\"']")


class TranslationMessagesFileFactory:

    @staticmethod
    def from_file_content(i18n_format: str, xml_content: str, path: Optional[str], encoding: Optional[str],
                          optional_master: Optional[MasterFileContent] = None,
                          config: Optional[AppConfig] = None) -> AbstractTranslationMessagesFile:
        """
        Read a file of a known format (xlf, xlf2, xmb or xtb).
        optional_master is only used for xtb.
        """
        if i18n_format == FORMAT_XLIFF12:
            return XliffFile(xml_content, path, encoding, config)
        if i18n_format == FORMAT_XLIFF20:
            return Xliff2File(xml_content, path, encoding, config)
        if i18n_format == FORMAT_XMB:
            return XmbFile(xml_content, path, encoding, config)
        if i18n_format == FORMAT_XTB:
            return XtbFile(xml_content, path, encoding, optional_master, config)
        raise InvalidFileError(f'oops, unsupported format "{i18n_format}"', path)

    @staticmethod
    def guess_format(xml_content: str) -> Optional[str]:
        """Format by looking at the root element, None if it is none of the supported ones."""
        if not xml_content:
            return None
        if "<xliff" in xml_content:
            match = _XLIFF_VERSION.search(xml_content)
            if match and match.group(1).startswith("2."):
                return FORMAT_XLIFF20
            return FORMAT_XLIFF12
        if "<messagebundle" in xml_content:
            return FORMAT_XMB
        if "<translationbundle" in xml_content:
            return FORMAT_XTB
        return None

    @staticmethod
    def from_unknown_format_file_content(xml_content: str, path: Optional[str], encoding: Optional[str],
                                         optional_master: Optional[MasterFileContent] = None,
                                         config: Optional[AppConfig] = None) -> AbstractTranslationMessagesFile:
        i18n_format = TranslationMessagesFileFactory.guess_format(xml_content)
        if i18n_format is None:
            raise InvalidFileError(f'could not identify file format of "{path}", it is neither XLIFF, XMB nor XTB',
                                   path)
        logger.debug(f"{path}: guessed format {i18n_format}")
        return TranslationMessagesFileFactory.from_file_content(i18n_format, xml_content, path, encoding,
                                                                optional_master, config)
