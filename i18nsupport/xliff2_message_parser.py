"""
Message format of XLIFF 2.0 files.

    <ph id="0" equiv="INTERPOLATION" disp="{{total}}"/>
    <pc id="1" equivStart="START_BOLD_TEXT" equivEnd="CLOSE_BOLD_TEXT" type="fmt"
        dispStart="&lt;b>" dispEnd="&lt;/b>">bold</pc>
    <ph id="2" equiv="LINE_BREAK" type="fmt" disp="&lt;br/>"/>
    <ph id="3" equiv="ICU"/>

ids are numbered per message. Older Angular versions wrote ICU references
as <ph id="n"/> without equiv, those are read as ICU reference n.
"""
from lxml import etree

from .constants import FORMAT_XLIFF20
from .errors import MessageSyntaxError
from .dom_utilities import local_name
from .message_parser import DESCEND, IGNORE, ElementClass, ElementKind, MessageDialect
from .tag_mapping import (ICU_NAME, INTERPOLATION_NAME, get_close_tag_placeholder_name,
                          get_empty_tag_placeholder_name, get_start_tag_placeholder_name,
                          get_tag_name_from_empty_tag_placeholder_name,
                          get_tag_name_from_start_tag_placeholder_name, get_type_for_tag,
                          parse_id_count_from_name)
from .xliff_message_parser import is_name_with_prefix, parse_placeholder_index, placeholder_name

XLIFF2_MIXED_CONTENT_ELEMENTS = ("skeleton", "note", "data", "source", "target", "pc", "mrk")


def _classify_ph(element) -> ElementClass:
    equiv = element.get("equiv")
    disp = element.get("disp")
    if not equiv:
        # legacy form, an ICU reference numbered by its id
        node_id = element.get("id") or ""
        if not node_id.isdigit():
            raise MessageSyntaxError(f'<ph> without equiv needs a numeric id, found "{node_id}"')
        return ElementClass(ElementKind.ICU_MESSAGE_REF, index=int(node_id), disp=disp)
    if is_name_with_prefix(equiv, INTERPOLATION_NAME):
        return ElementClass(ElementKind.PLACEHOLDER, index=parse_placeholder_index(equiv, INTERPOLATION_NAME),
                            disp=disp)
    if is_name_with_prefix(equiv, ICU_NAME):
        return ElementClass(ElementKind.ICU_MESSAGE_REF, index=parse_placeholder_index(equiv, ICU_NAME), disp=disp)
    empty_tag = get_tag_name_from_empty_tag_placeholder_name(equiv)
    if empty_tag:
        return ElementClass(ElementKind.EMPTY_TAG, empty_tag, parse_id_count_from_name(equiv))
    return IGNORE


def classify_xliff2_element(element) -> ElementClass:
    name = local_name(element)
    if name == "ph":
        return _classify_ph(element)
    if name == "pc":
        equiv_start = element.get("equivStart") or ""
        tag_name = get_tag_name_from_start_tag_placeholder_name(equiv_start)
        if tag_name is None:
            raise MessageSyntaxError(f'<pc> with unexpected equivStart "{equiv_start}"')
        return ElementClass(ElementKind.PAIRED_TAG, tag_name, parse_id_count_from_name(equiv_start))
    return DESCEND


def _ph_element(node_id: str, equiv: str, type_=None, disp=None):
    element = etree.Element("ph")
    element.set("id", node_id)
    element.set("equiv", equiv)
    if type_:
        element.set("type", type_)
    if disp:
        element.set("disp", disp)
    return element


def build_start_tag(part, node_id):
    element = etree.Element("pc")
    element.set("id", node_id)
    element.set("equivStart", get_start_tag_placeholder_name(part.tag_name, part.id_counter))
    element.set("equivEnd", get_close_tag_placeholder_name(part.tag_name))
    element.set("type", get_type_for_tag(part.tag_name))
    element.set("dispStart", f"<{part.tag_name}>")
    element.set("dispEnd", f"</{part.tag_name}>")
    return element


def build_empty_tag(part, node_id):
    return _ph_element(node_id, get_empty_tag_placeholder_name(part.tag_name, part.id_counter),
                       get_type_for_tag(part.tag_name), f"<{part.tag_name}/>")


def build_placeholder(part, node_id):
    return _ph_element(node_id, placeholder_name(INTERPOLATION_NAME, part.index), disp=part.disp)


def build_icu_ref(part, node_id):
    return _ph_element(node_id, placeholder_name(ICU_NAME, part.index), disp=part.disp)


XLIFF2_MESSAGE_DIALECT = MessageDialect(
    name=FORMAT_XLIFF20,
    classify_element=classify_xliff2_element,
    build_start_tag_node=build_start_tag,
    build_end_tag_node=None,
    build_empty_tag_node=build_empty_tag,
    build_placeholder_node=build_placeholder,
    build_icu_ref_node=build_icu_ref,
    paired_tags=True,
    mixed_content_elements=XLIFF2_MIXED_CONTENT_ELEMENTS,
)
