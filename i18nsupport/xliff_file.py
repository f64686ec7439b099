"""
XLIFF 1.2 files as created by the Angular extractor (ng xi18n).

    <xliff version="1.2" xmlns="urn:oasis:names:tc:xliff:document:1.2">
      <file source-language="en" datatype="plaintext" original="ng2.template">
        <body>
          <trans-unit id="..." datatype="html">
            <source>...</source>
            <target state="new">...</target>
            <context-group purpose="location">...</context-group>
            <note priority="1" from="description">...</note>
          </trans-unit>
"""
import copy
from typing import List, Optional

from lxml import etree

from .constants import (FILETYPE_XLIFF12, FORMAT_XLIFF12, STATE_FINAL, STATE_NEW,
                        STATE_TRANSLATED)
from .dom_utilities import (append_child, find_child, find_children, find_descendants,
                            find_first_descendant, get_text_content, get_xml_content, insert_after,
                            local_name, qualified_name, remove_element, set_xml_content)
from .errors import InvalidFileError, UnknownStateError
from .logger import get_logger
from .trans_unit import AbstractTransUnit, Note, SourceReference
from .translation_messages_file import AbstractTranslationMessagesFile
from .xliff_message_parser import XLIFF_MESSAGE_DIALECT

logger = get_logger(__name__)

NOTE_FROM_DESCRIPTION = "description"
NOTE_FROM_MEANING = "meaning"

_NATIVE_TO_STATE = {
    "new": STATE_NEW,
    "needs-translation": STATE_NEW,
    "translated": STATE_TRANSLATED,
    "needs-adaptation": STATE_TRANSLATED,
    "needs-l10n": STATE_TRANSLATED,
    "needs-review-adaptation": STATE_TRANSLATED,
    "needs-review-l10n": STATE_TRANSLATED,
    "needs-review-translation": STATE_TRANSLATED,
    "final": STATE_FINAL,
    "signed-off": STATE_FINAL,
}

_STATE_TO_NATIVE = {
    STATE_NEW: "new",
    STATE_TRANSLATED: "translated",
    STATE_FINAL: "final",
}


class XliffTransUnit(AbstractTransUnit):

    def _source_element(self):
        return find_child(self._element, "source")

    def _target_element(self):
        return find_child(self._element, "target")

    def _ensure_target_element(self):
        target = self._target_element()
        if target is None:
            source = self._source_element()
            target = etree.Element(qualified_name(self._element, "target"))
            if source is not None:
                insert_after(target, source)
            else:
                append_child(self._element, target)
        return target

    def source_content(self) -> str:
        return get_xml_content(self._source_element())

    def set_source_content(self, new_content: str):
        source = self._source_element()
        if source is None:
            source = etree.Element(qualified_name(self._element, "source"))
            self._element.insert(0, source)
        set_xml_content(source, new_content)
        self._source_content_normalized = None

    def create_source_content_normalized(self):
        source = self._source_element()
        if source is None:
            return None
        return self.message_dialect().create_normalized_message_from_xml(source)

    def target_content(self) -> str:
        return get_xml_content(self._target_element())

    def target_content_normalized(self):
        target = self._target_element()
        if target is None:
            return None
        return self.message_dialect().create_normalized_message_from_xml(target, self.source_content_normalized())

    def native_target_state(self) -> Optional[str]:
        target = self._target_element()
        if target is None:
            return None
        return target.get("state")

    def target_state(self) -> Optional[str]:
        if self._target_element() is None:
            return None
        return self.map_native_state_to_state(self.native_target_state())

    def map_state_to_native_state(self, state: str) -> str:
        if state not in _STATE_TO_NATIVE:
            raise UnknownStateError(state)
        return _STATE_TO_NATIVE[state]

    def map_native_state_to_state(self, native_state: Optional[str]) -> str:
        return _NATIVE_TO_STATE.get(native_state, STATE_NEW)

    def set_native_target_state(self, native_state: str):
        self._ensure_target_element().set("state", native_state)

    def source_references(self) -> List[SourceReference]:
        references = []
        for group in find_children(self._element, "context-group"):
            if group.get("purpose") != "location":
                continue
            sourcefile = None
            linenumber = 0
            for context in find_children(group, "context"):
                if context.get("context-type") == "sourcefile":
                    sourcefile = get_text_content(context)
                elif context.get("context-type") == "linenumber":
                    try:
                        linenumber = int((get_text_content(context) or "0").strip())
                    except ValueError:
                        logger.debug(f"invalid linenumber in trans-unit {self._id}")
            if sourcefile:
                references.append(SourceReference(sourcefile, linenumber))
        return references

    def set_source_references(self, source_references: List[SourceReference]):
        for group in find_children(self._element, "context-group"):
            if group.get("purpose") == "location":
                remove_element(group)
        for reference in source_references:
            group = etree.Element(qualified_name(self._element, "context-group"))
            group.set("purpose", "location")
            sourcefile = etree.SubElement(group, qualified_name(self._element, "context"))
            sourcefile.set("context-type", "sourcefile")
            sourcefile.text = reference.sourcefile
            linenumber = etree.SubElement(group, qualified_name(self._element, "context"))
            linenumber.set("context-type", "linenumber")
            linenumber.text = str(reference.linenumber)
            append_child(self._element, group)

    def _note_with_from(self, from_: str):
        for note in find_children(self._element, "note"):
            if note.get("from") == from_:
                return note
        return None

    def _set_note_with_from(self, from_: str, text: Optional[str]):
        note = self._note_with_from(from_)
        if not text:
            if note is not None:
                remove_element(note)
            return
        if note is None:
            note = etree.Element(qualified_name(self._element, "note"))
            note.set("priority", "1")
            note.set("from", from_)
            append_child(self._element, note)
        note.text = text

    def description(self) -> Optional[str]:
        return get_text_content(self._note_with_from(NOTE_FROM_DESCRIPTION))

    def set_description(self, description: Optional[str]):
        self._set_note_with_from(NOTE_FROM_DESCRIPTION, description)

    def meaning(self) -> Optional[str]:
        return get_text_content(self._note_with_from(NOTE_FROM_MEANING))

    def set_meaning(self, meaning: Optional[str]):
        self._set_note_with_from(NOTE_FROM_MEANING, meaning)

    def notes(self) -> List[Note]:
        return [Note(get_text_content(note) or "", note.get("from"))
                for note in find_children(self._element, "note")
                if note.get("from") not in (NOTE_FROM_DESCRIPTION, NOTE_FROM_MEANING)]

    def supports_set_notes(self) -> bool:
        return True

    def set_notes(self, notes: List[Note]):
        for note in find_children(self._element, "note"):
            if note.get("from") not in (NOTE_FROM_DESCRIPTION, NOTE_FROM_MEANING):
                remove_element(note)
        for note in notes:
            element = etree.Element(qualified_name(self._element, "note"))
            if note.from_:
                element.set("from", note.from_)
            element.text = note.text
            append_child(self._element, element)

    def translate_native(self, native_translation: str):
        set_xml_content(self._ensure_target_element(), native_translation)

    def clone_with_source_as_target(self, is_default_lang: bool, copy_content: bool, target_file):
        element = copy.deepcopy(self._element)
        element.tail = None
        clone = XliffTransUnit(element, self._id, target_file)
        clone.use_source_as_target(is_default_lang, copy_content)
        return clone

    def use_source_as_target(self, is_default_lang: bool, copy_content: bool):
        target = self._ensure_target_element()
        set_xml_content(target, self.new_target_content(self.source_content(), is_default_lang, copy_content))
        target.set("state", self.new_target_state(is_default_lang))


class XliffFile(AbstractTranslationMessagesFile):

    def i18n_format(self) -> str:
        return FORMAT_XLIFF12

    def file_type(self) -> str:
        return FILETYPE_XLIFF12

    def base_message_dialect(self):
        return XLIFF_MESSAGE_DIALECT

    def init_document(self):
        if local_name(self._root) != "xliff":
            raise InvalidFileError(
                f'File "{self._filename}" seems to be no xliff file (should contain an xliff element)',
                self._filename,
            )
        version = self._root.get("version")
        if version and not version.startswith("1."):
            raise InvalidFileError(
                f'File "{self._filename}" seems to be no xliff 1.2 file, version should be 1.2, found {version}',
                self._filename,
            )

    def init_trans_units(self) -> list:
        units = []
        for element in find_descendants(self._root, "trans-unit"):
            unit_id = element.get("id")
            if not unit_id:
                self.add_warning(f'oops, trans-unit without "id" found in master, please check file {self._filename}')
            units.append(XliffTransUnit(element, unit_id, self))
        return units

    def trans_unit_container(self):
        body = find_first_descendant(self._root, "body")
        if body is None:
            file_element = self._file_element()
            body = etree.SubElement(file_element, qualified_name(file_element, "body"))
        return body

    def _file_element(self):
        file_element = find_child(self._root, "file")
        if file_element is None:
            file_element = etree.SubElement(self._root, qualified_name(self._root, "file"))
        return file_element

    def source_language(self) -> Optional[str]:
        file_element = find_child(self._root, "file")
        return file_element.get("source-language") if file_element is not None else None

    def set_source_language(self, language: str):
        self._file_element().set("source-language", language)

    def target_language(self) -> Optional[str]:
        file_element = find_child(self._root, "file")
        return file_element.get("target-language") if file_element is not None else None

    def set_target_language(self, language: str):
        self._file_element().set("target-language", language)

    def create_translation_file_for_lang(self, lang: str, filename: str, is_default_lang: bool,
                                         copy_content: bool) -> "XliffFile":
        translation_file = XliffFile(self.edited_content(False), filename, self._encoding, self._config)
        translation_file.set_new_trans_unit_target_prefix(self._target_prefix)
        translation_file.set_new_trans_unit_target_suffix(self._target_suffix)
        translation_file.set_target_language(lang)
        for unit in translation_file:
            unit.use_source_as_target(is_default_lang, copy_content)
        translation_file.count_numbers()
        return translation_file
