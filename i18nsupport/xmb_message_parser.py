"""
Message format of XMB files (Angular message catalog).

    <ph name="INTERPOLATION"><ex>INTERPOLATION</ex></ph>
    <ph name="START_BOLD_TEXT"><ex>&lt;b&gt;</ex></ph>bold<ph name="CLOSE_BOLD_TEXT"><ex>&lt;/b&gt;</ex></ph>
    <ph name="LINE_BREAK"><ex>&lt;br&gt;</ex></ph>
    <ph name="ICU"><ex>ICU</ex></ph>

The <ex> element holds an example of the placeholder, for tags this is the
html tag itself. <source> elements of a <msg> point to the template and are
not part of the message.
"""
import re
from typing import Optional

from lxml import etree

from .constants import FORMAT_XMB
from .dom_utilities import find_child, get_text_content, local_name
from .message_parser import DESCEND, IGNORE, ElementClass, ElementKind, MessageDialect
from .tag_mapping import (ICU_NAME, INTERPOLATION_NAME, get_close_tag_placeholder_name,
                          get_empty_tag_placeholder_name, get_start_tag_placeholder_name,
                          get_tag_name_from_close_tag_placeholder_name,
                          get_tag_name_from_empty_tag_placeholder_name,
                          get_tag_name_from_start_tag_placeholder_name, is_close_tag_placeholder_name,
                          is_start_tag_placeholder_name, parse_id_count_from_name)
from .xliff_message_parser import is_name_with_prefix, parse_placeholder_index, placeholder_name

XMB_MIXED_CONTENT_ELEMENTS = ("msg",)
XMB_IGNORED_ELEMENTS = frozenset(["source"])

_TAG_IN_EXAMPLE = re.compile(r"^\s*</?\s*([a-zA-Z][a-zA-Z0-9-]*)")


def _tag_name_from_example(element) -> Optional[str]:
    example = find_child(element, "ex")
    if example is None:
        return None
    match = _TAG_IN_EXAMPLE.match(get_text_content(example) or "")
    return match.group(1).lower() if match else None


def _example_text(element) -> Optional[str]:
    example = find_child(element, "ex")
    return get_text_content(example) if example is not None else None


def classify_xmb_element(element) -> ElementClass:
    name = local_name(element)
    if name in XMB_IGNORED_ELEMENTS:
        return IGNORE
    if name != "ph":
        return DESCEND
    ph_name = element.get("name") or ""
    if is_name_with_prefix(ph_name, INTERPOLATION_NAME) or is_name_with_prefix(ph_name, ICU_NAME):
        is_icu = is_name_with_prefix(ph_name, ICU_NAME)
        prefix = ICU_NAME if is_icu else INTERPOLATION_NAME
        example = _example_text(element)
        disp = example if example and example != ph_name else None
        kind = ElementKind.ICU_MESSAGE_REF if is_icu else ElementKind.PLACEHOLDER
        return ElementClass(kind, index=parse_placeholder_index(ph_name, prefix), disp=disp)
    if is_start_tag_placeholder_name(ph_name):
        tag_name = _tag_name_from_example(element) or get_tag_name_from_start_tag_placeholder_name(ph_name)
        return ElementClass(ElementKind.START_TAG, tag_name, parse_id_count_from_name(ph_name))
    if is_close_tag_placeholder_name(ph_name):
        tag_name = _tag_name_from_example(element) or get_tag_name_from_close_tag_placeholder_name(ph_name)
        return ElementClass(ElementKind.END_TAG, tag_name)
    empty_tag = get_tag_name_from_empty_tag_placeholder_name(ph_name)
    if empty_tag:
        tag_name = _tag_name_from_example(element) or empty_tag
        return ElementClass(ElementKind.EMPTY_TAG, tag_name, parse_id_count_from_name(ph_name))
    return IGNORE


def _ph_element(name: str, example: str):
    element = etree.Element("ph")
    element.set("name", name)
    ex = etree.SubElement(element, "ex")
    ex.text = example
    return element


def build_start_tag(part, node_id):
    return _ph_element(get_start_tag_placeholder_name(part.tag_name, part.id_counter), f"<{part.tag_name}>")


def build_end_tag(part, node_id):
    return _ph_element(get_close_tag_placeholder_name(part.tag_name), f"</{part.tag_name}>")


def build_empty_tag(part, node_id):
    return _ph_element(get_empty_tag_placeholder_name(part.tag_name, part.id_counter), f"<{part.tag_name}>")


def build_placeholder(part, node_id):
    name = placeholder_name(INTERPOLATION_NAME, part.index)
    return _ph_element(name, part.disp or name)


def build_icu_ref(part, node_id):
    name = placeholder_name(ICU_NAME, part.index)
    return _ph_element(name, part.disp or name)


XMB_MESSAGE_DIALECT = MessageDialect(
    name=FORMAT_XMB,
    classify_element=classify_xmb_element,
    build_start_tag_node=build_start_tag,
    build_end_tag_node=build_end_tag,
    build_empty_tag_node=build_empty_tag,
    build_placeholder_node=build_placeholder,
    build_icu_ref_node=build_icu_ref,
    ignored_elements=XMB_IGNORED_ELEMENTS,
    mixed_content_elements=XMB_MIXED_CONTENT_ELEMENTS,
)
