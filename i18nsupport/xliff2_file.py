"""
XLIFF 2.0 files as created by the Angular extractor (ng xi18n --i18n-format xlf2).

    <xliff version="2.0" xmlns="urn:oasis:names:tc:xliff:document:2.0" srcLang="en" trgLang="de">
      <file original="ng.template" id="ngi18n">
        <unit id="...">
          <notes>
            <note category="description">...</note>
            <note category="location">src/app/app.component.ts:10</note>
          </notes>
          <segment state="initial">
            <source>...</source>
            <target>...</target>
          </segment>
        </unit>
"""
import copy
from typing import List, Optional

from lxml import etree

from .constants import (FILETYPE_XLIFF20, FORMAT_XLIFF20, STATE_FINAL, STATE_NEW,
                        STATE_TRANSLATED)
from .dom_utilities import (append_child, find_child, find_children, find_descendants,
                            get_text_content, get_xml_content, insert_after, insert_first,
                            local_name, qualified_name, remove_element, set_xml_content)
from .errors import InvalidFileError, UnknownStateError
from .trans_unit import AbstractTransUnit, Note, SourceReference, parse_source_reference
from .translation_messages_file import AbstractTranslationMessagesFile
from .xliff2_message_parser import XLIFF2_MESSAGE_DIALECT

NOTE_CATEGORY_DESCRIPTION = "description"
NOTE_CATEGORY_MEANING = "meaning"
NOTE_CATEGORY_LOCATION = "location"
_SPECIAL_CATEGORIES = (NOTE_CATEGORY_DESCRIPTION, NOTE_CATEGORY_MEANING, NOTE_CATEGORY_LOCATION)

_NATIVE_TO_STATE = {
    "initial": STATE_NEW,
    "translated": STATE_TRANSLATED,
    # reviewed is treated as translated
    "reviewed": STATE_TRANSLATED,
    "final": STATE_FINAL,
}

_STATE_TO_NATIVE = {
    STATE_NEW: "initial",
    STATE_TRANSLATED: "translated",
    STATE_FINAL: "final",
}


class Xliff2TransUnit(AbstractTransUnit):

    def _segment(self, create: bool = False):
        segment = find_child(self._element, "segment")
        if segment is None and create:
            segment = etree.Element(qualified_name(self._element, "segment"))
            append_child(self._element, segment)
        return segment

    def _source_element(self):
        segment = self._segment()
        return find_child(segment, "source") if segment is not None else None

    def _target_element(self):
        segment = self._segment()
        return find_child(segment, "target") if segment is not None else None

    def _ensure_target_element(self):
        target = self._target_element()
        if target is None:
            segment = self._segment(create=True)
            target = etree.Element(qualified_name(self._element, "target"))
            source = find_child(segment, "source")
            if source is not None:
                insert_after(target, source)
            else:
                append_child(segment, target)
        return target

    def source_content(self) -> str:
        return get_xml_content(self._source_element())

    def set_source_content(self, new_content: str):
        source = self._source_element()
        if source is None:
            segment = self._segment(create=True)
            source = etree.Element(qualified_name(self._element, "source"))
            insert_first(segment, source)
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
        segment = self._segment()
        if segment is None:
            return None
        # initial is the default of the state attribute
        return segment.get("state", "initial")

    def map_state_to_native_state(self, state: str) -> str:
        if state not in _STATE_TO_NATIVE:
            raise UnknownStateError(state)
        return _STATE_TO_NATIVE[state]

    def map_native_state_to_state(self, native_state: str) -> str:
        return _NATIVE_TO_STATE.get(native_state, STATE_NEW)

    def set_native_target_state(self, native_state: str):
        self._segment(create=True).set("state", native_state)

    def _notes_element(self, create: bool = False):
        notes = find_child(self._element, "notes")
        if notes is None and create:
            notes = etree.Element(qualified_name(self._element, "notes"))
            insert_first(self._element, notes)
        return notes

    def _notes_with_category(self, category: str) -> list:
        notes = self._notes_element()
        if notes is None:
            return []
        return [note for note in find_children(notes, "note") if note.get("category") == category]

    def _add_note(self, category: Optional[str], text: str):
        notes = self._notes_element(create=True)
        note = etree.Element(qualified_name(self._element, "note"))
        if category:
            note.set("category", category)
        note.text = text
        append_child(notes, note)

    def _remove_notes(self, predicate):
        notes = self._notes_element()
        if notes is None:
            return
        for note in find_children(notes, "note"):
            if predicate(note):
                remove_element(note)

    def _set_note_with_category(self, category: str, text: Optional[str]):
        existing = self._notes_with_category(category)
        if not text:
            self._remove_notes(lambda note: note.get("category") == category)
        elif existing:
            existing[0].text = text
        else:
            self._add_note(category, text)

    def source_references(self) -> List[SourceReference]:
        references = []
        for note in self._notes_with_category(NOTE_CATEGORY_LOCATION):
            reference = parse_source_reference(get_text_content(note))
            if reference:
                references.append(reference)
        return references

    def set_source_references(self, source_references: List[SourceReference]):
        self._remove_notes(lambda note: note.get("category") == NOTE_CATEGORY_LOCATION)
        for reference in source_references:
            self._add_note(NOTE_CATEGORY_LOCATION, f"{reference.sourcefile}:{reference.linenumber}")

    def description(self) -> Optional[str]:
        notes = self._notes_with_category(NOTE_CATEGORY_DESCRIPTION)
        return get_text_content(notes[0]) if notes else None

    def set_description(self, description: Optional[str]):
        self._set_note_with_category(NOTE_CATEGORY_DESCRIPTION, description)

    def meaning(self) -> Optional[str]:
        notes = self._notes_with_category(NOTE_CATEGORY_MEANING)
        return get_text_content(notes[0]) if notes else None

    def set_meaning(self, meaning: Optional[str]):
        self._set_note_with_category(NOTE_CATEGORY_MEANING, meaning)

    def notes(self) -> List[Note]:
        notes = self._notes_element()
        if notes is None:
            return []
        return [Note(get_text_content(note) or "", note.get("category"))
                for note in find_children(notes, "note")
                if note.get("category") not in _SPECIAL_CATEGORIES]

    def supports_set_notes(self) -> bool:
        return True

    def set_notes(self, notes: List[Note]):
        self._remove_notes(lambda note: note.get("category") not in _SPECIAL_CATEGORIES)
        for note in notes:
            self._add_note(note.from_, note.text)

    def translate_native(self, native_translation: str):
        set_xml_content(self._ensure_target_element(), native_translation)

    def clone_with_source_as_target(self, is_default_lang: bool, copy_content: bool, target_file):
        element = copy.deepcopy(self._element)
        element.tail = None
        clone = Xliff2TransUnit(element, self._id, target_file)
        clone.use_source_as_target(is_default_lang, copy_content)
        return clone

    def use_source_as_target(self, is_default_lang: bool, copy_content: bool):
        target = self._ensure_target_element()
        set_xml_content(target, self.new_target_content(self.source_content(), is_default_lang, copy_content))
        self._segment().set("state", self.new_target_state(is_default_lang))


class Xliff2File(AbstractTranslationMessagesFile):

    def i18n_format(self) -> str:
        return FORMAT_XLIFF20

    def file_type(self) -> str:
        return FILETYPE_XLIFF20

    def base_message_dialect(self):
        return XLIFF2_MESSAGE_DIALECT

    def init_document(self):
        if local_name(self._root) != "xliff":
            raise InvalidFileError(
                f'File "{self._filename}" seems to be no xliff file (should contain an xliff element)',
                self._filename,
            )
        version = self._root.get("version")
        if version != "2.0":
            raise InvalidFileError(
                f'File "{self._filename}" seems to be no xliff 2 file, version should be 2.0, found {version}',
                self._filename,
            )

    def init_trans_units(self) -> list:
        units = []
        for element in find_descendants(self._root, "unit"):
            unit_id = element.get("id")
            if not unit_id:
                self.add_warning(f'oops, trans-unit without "id" found in master, please check file {self._filename}')
            units.append(Xliff2TransUnit(element, unit_id, self))
        return units

    def trans_unit_container(self):
        file_element = find_child(self._root, "file")
        if file_element is None:
            file_element = etree.SubElement(self._root, qualified_name(self._root, "file"))
        return file_element

    def source_language(self) -> Optional[str]:
        return self._root.get("srcLang")

    def set_source_language(self, language: str):
        self._root.set("srcLang", language)

    def target_language(self) -> Optional[str]:
        return self._root.get("trgLang")

    def set_target_language(self, language: str):
        self._root.set("trgLang", language)

    def create_translation_file_for_lang(self, lang: str, filename: str, is_default_lang: bool,
                                         copy_content: bool) -> "Xliff2File":
        translation_file = Xliff2File(self.edited_content(False), filename, self._encoding, self._config)
        translation_file.set_new_trans_unit_target_prefix(self._target_prefix)
        translation_file.set_new_trans_unit_target_suffix(self._target_suffix)
        translation_file.set_target_language(lang)
        for unit in translation_file:
            unit.use_source_as_target(is_default_lang, copy_content)
        translation_file.count_numbers()
        return translation_file
