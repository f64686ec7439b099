"""
Message format of XTB files (translations of an XMB file).

Same placeholder names as XMB, but without examples:

    <ph name="START_BOLD_TEXT"/>fett<ph name="CLOSE_BOLD_TEXT"/>
"""
from lxml import etree

from .constants import FORMAT_XTB
from .message_parser import MessageDialect
from .tag_mapping import (ICU_NAME, INTERPOLATION_NAME, get_close_tag_placeholder_name,
                          get_empty_tag_placeholder_name, get_start_tag_placeholder_name)
from .xliff_message_parser import placeholder_name
from .xmb_message_parser import XMB_IGNORED_ELEMENTS, classify_xmb_element

XTB_MIXED_CONTENT_ELEMENTS = ("translation",)


def _ph_element(name: str):
    element = etree.Element("ph")
    element.set("name", name)
    return element


def build_start_tag(part, node_id):
    return _ph_element(get_start_tag_placeholder_name(part.tag_name, part.id_counter))


def build_end_tag(part, node_id):
    return _ph_element(get_close_tag_placeholder_name(part.tag_name))


def build_empty_tag(part, node_id):
    return _ph_element(get_empty_tag_placeholder_name(part.tag_name, part.id_counter))


def build_placeholder(part, node_id):
    return _ph_element(placeholder_name(INTERPOLATION_NAME, part.index))


def build_icu_ref(part, node_id):
    return _ph_element(placeholder_name(ICU_NAME, part.index))


# parsing is shared with XMB, tag names come from <ex> if there is one
XTB_MESSAGE_DIALECT = MessageDialect(
    name=FORMAT_XTB,
    classify_element=classify_xmb_element,
    build_start_tag_node=build_start_tag,
    build_end_tag_node=build_end_tag,
    build_empty_tag_node=build_empty_tag,
    build_placeholder_node=build_placeholder,
    build_icu_ref_node=build_icu_ref,
    ignored_elements=XMB_IGNORED_ELEMENTS,
    mixed_content_elements=XTB_MIXED_CONTENT_ELEMENTS,
)
