"""
Message format of XLIFF 1.2 files as written by the Angular extractor.

    <x id="INTERPOLATION" equiv-text="{{total}}"/>
    <x id="START_BOLD_TEXT" ctype="x-b" equiv-text="&lt;b>"/>bold<x id="CLOSE_BOLD_TEXT" ctype="x-b"/>
    <x id="LINE_BREAK" ctype="lb" equiv-text="&lt;br/>"/>
    <x id="ICU"/>
"""
from lxml import etree

from .constants import FORMAT_XLIFF12
from .errors import MessageSyntaxError
from .message_parser import DESCEND, IGNORE, ElementClass, ElementKind, MessageDialect
from .tag_mapping import (ICU_NAME, INTERPOLATION_NAME, get_close_tag_placeholder_name,
                          get_ctype_for_tag, get_empty_tag_placeholder_name,
                          get_start_tag_placeholder_name, get_tag_name_from_close_tag_placeholder_name,
                          get_tag_name_from_empty_tag_placeholder_name,
                          get_tag_name_from_start_tag_placeholder_name, is_close_tag_placeholder_name,
                          is_start_tag_placeholder_name, parse_id_count_from_name)
from .dom_utilities import local_name

XLIFF_MIXED_CONTENT_ELEMENTS = (
    "source", "target", "tool", "seg-source", "g", "ph", "bpt", "ept", "it", "sub", "mrk",
)


def parse_placeholder_index(name: str, prefix: str) -> int:
    """INTERPOLATION -> 0, INTERPOLATION_2 -> 2"""
    if name == prefix:
        return 0
    suffix = name[len(prefix):]
    if not suffix.startswith("_") or not suffix[1:].isdigit():
        raise MessageSyntaxError(f'invalid placeholder name "{name}"')
    return int(suffix[1:])


def placeholder_name(prefix: str, index: int) -> str:
    if index == 0:
        return prefix
    return f"{prefix}_{index}"


def is_name_with_prefix(name: str, prefix: str) -> bool:
    return name == prefix or name.startswith(prefix + "_")


def classify_xliff_element(element) -> ElementClass:
    if local_name(element) != "x":
        return DESCEND
    name = element.get("id") or ""
    disp = element.get("equiv-text")
    if is_name_with_prefix(name, INTERPOLATION_NAME):
        return ElementClass(ElementKind.PLACEHOLDER, index=parse_placeholder_index(name, INTERPOLATION_NAME),
                            disp=disp)
    if is_name_with_prefix(name, ICU_NAME):
        return ElementClass(ElementKind.ICU_MESSAGE_REF, index=parse_placeholder_index(name, ICU_NAME), disp=disp)
    if is_start_tag_placeholder_name(name):
        return ElementClass(ElementKind.START_TAG, get_tag_name_from_start_tag_placeholder_name(name),
                            parse_id_count_from_name(name))
    if is_close_tag_placeholder_name(name):
        return ElementClass(ElementKind.END_TAG, get_tag_name_from_close_tag_placeholder_name(name))
    empty_tag = get_tag_name_from_empty_tag_placeholder_name(name)
    if empty_tag:
        return ElementClass(ElementKind.EMPTY_TAG, empty_tag, parse_id_count_from_name(name))
    return IGNORE


def _x_element(name: str, ctype=None, equiv_text=None):
    element = etree.Element("x")
    element.set("id", name)
    if ctype:
        element.set("ctype", ctype)
    if equiv_text:
        element.set("equiv-text", equiv_text)
    return element


def build_start_tag(part, node_id):
    return _x_element(get_start_tag_placeholder_name(part.tag_name, part.id_counter),
                      get_ctype_for_tag(part.tag_name), f"<{part.tag_name}>")


def build_end_tag(part, node_id):
    return _x_element(get_close_tag_placeholder_name(part.tag_name), get_ctype_for_tag(part.tag_name))


def build_empty_tag(part, node_id):
    return _x_element(get_empty_tag_placeholder_name(part.tag_name, part.id_counter),
                      get_ctype_for_tag(part.tag_name), f"<{part.tag_name}/>")


def build_placeholder(part, node_id):
    return _x_element(placeholder_name(INTERPOLATION_NAME, part.index), equiv_text=part.disp)


def build_icu_ref(part, node_id):
    return _x_element(placeholder_name(ICU_NAME, part.index), equiv_text=part.disp)


XLIFF_MESSAGE_DIALECT = MessageDialect(
    name=FORMAT_XLIFF12,
    classify_element=classify_xliff_element,
    build_start_tag_node=build_start_tag,
    build_end_tag_node=build_end_tag,
    build_empty_tag_node=build_empty_tag,
    build_placeholder_node=build_placeholder,
    build_icu_ref_node=build_icu_ref,
    mixed_content_elements=XLIFF_MIXED_CONTENT_ELEMENTS,
)
