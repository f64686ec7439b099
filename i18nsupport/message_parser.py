"""
Conversion between native xml and ParsedMessage.

The four formats only differ in how a placeholder or tag is written, so there
is a single traversal in each direction. A MessageDialect record supplies the
format specific parts: classify_element tells what a native element stands
for, the build_* functions create the native element for a message part.
"""
from dataclasses import dataclass, field
from typing import Callable, FrozenSet, Optional, Sequence

from lxml import etree

from .constants import DEFAULT_MAX_NESTING_DEPTH
from .dom_utilities import FRAGMENT_ELEMENT, get_xml_content, local_name, parse_xml_fragment
from .errors import LexError, TooDeeplyNestedError, UnclosedTagError, UnexpectedCloseTagError
from .icu_message import IcuMessageParser, is_icu_message_start, unescape_icu_text
from .message_parts import ParsedMessagePartType
from .message_tokenizer import (EMPTY_TAG, END_TAG, ICU_MESSAGE, ICU_MESSAGE_REF, PLACEHOLDER,
                                START_TAG, TEXT, MessageTokenizer)
from .parsed_message import MessageBuilder, ParsedMessage


class ElementKind:
    PLACEHOLDER = "PLACEHOLDER"
    ICU_MESSAGE_REF = "ICU_MESSAGE_REF"
    START_TAG = "START_TAG"
    END_TAG = "END_TAG"
    EMPTY_TAG = "EMPTY_TAG"
    # start tag whose content is the tagged text (XLIFF 2.0 <pc>)
    PAIRED_TAG = "PAIRED_TAG"
    # not part of the message (e.g. <source> in XMB)
    IGNORE = "IGNORE"
    # unknown markup, only the content counts
    DESCEND = "DESCEND"


@dataclass(frozen=True)
class ElementClass:
    kind: str
    tag_name: Optional[str] = None
    id_counter: int = 0
    index: int = 0
    disp: Optional[str] = None


DESCEND = ElementClass(ElementKind.DESCEND)
IGNORE = ElementClass(ElementKind.IGNORE)


@dataclass(frozen=True)
class MessageDialect:
    """
    Everything that is specific to one native format.

    The build functions get the message part and a running number for the
    native element (used as id by XLIFF 2.0) and return a new lxml element.
    If paired_tags is set, the start tag element contains the tagged content
    and build_end_tag_node is not used.
    """
    name: str
    classify_element: Callable[[etree._Element], ElementClass]
    build_start_tag_node: Callable
    build_end_tag_node: Optional[Callable]
    build_empty_tag_node: Callable
    build_placeholder_node: Callable
    build_icu_ref_node: Callable
    paired_tags: bool = False
    # children that are not part of the message content
    ignored_elements: FrozenSet[str] = field(default_factory=frozenset)
    mixed_content_elements: Sequence[str] = ()
    max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH

    def parse_normalized_string(self, normalized_string: str,
                                source_message: Optional[ParsedMessage] = None) -> ParsedMessage:
        """Message from the canonical display syntax (<b>, {{0}}, ...)."""
        tokens = MessageTokenizer().tokenize(normalized_string)
        return message_from_tokens(self, tokens, source_message, normalized_string)

    def parse_icu_message_text(self, icu_text: str,
                               source_message: Optional[ParsedMessage] = None) -> ParsedMessage:
        return parse_icu_message(self, icu_text, source_message)

    def create_normalized_message_from_xml(self, element,
                                           source_message: Optional[ParsedMessage] = None) -> ParsedMessage:
        """Message from the content of a native element (<source>, <target>, <msg>, ...)."""
        return parse_native(self, element, source_message)

    def create_normalized_message_from_xml_string(self, xml_string: str,
                                                  source_message: Optional[ParsedMessage] = None) -> ParsedMessage:
        return parse_native(self, parse_xml_fragment(xml_string), source_message)

    def build_native(self, message: ParsedMessage):
        return build_native(self, message)

    def is_icu_message_start(self, text: Optional[str]) -> bool:
        return is_icu_message_start(text)


def message_from_tokens(dialect: MessageDialect, tokens, source_message: Optional[ParsedMessage] = None,
                        normalized_string: Optional[str] = None) -> ParsedMessage:
    builder = MessageBuilder(dialect, source_message, normalized_string, dialect.max_nesting_depth)
    for token in tokens:
        value = token.value
        if token.type == TEXT:
            builder.add_text(value["text"])
        elif token.type == START_TAG:
            builder.add_start_tag(value["name"], value["id_counter"])
        elif token.type == END_TAG:
            builder.add_end_tag(value["name"])
        elif token.type == EMPTY_TAG:
            builder.add_empty_tag(value["name"], value["id_counter"])
        elif token.type == PLACEHOLDER:
            index = value["index"]
            disp = source_message.placeholder_disp(index) if source_message else None
            builder.add_placeholder(index, disp)
        elif token.type == ICU_MESSAGE_REF:
            index = value["index"]
            disp = source_message.icu_message_ref_disp(index) if source_message else None
            builder.add_icu_message_ref(index, disp)
        elif token.type == ICU_MESSAGE:
            raise LexError(
                "<ICU-Message/> cannot be used in a normalized string, translate the ICU message instead",
                normalized_string,
            )
        else:
            raise LexError(f"unexpected token {token.type}", normalized_string)
    return builder.build()


def _unescape_text_nodes(fragment):
    """ICU escapes apply to text only, attribute values are taken as they are."""
    for element in fragment.iter():
        if element.text:
            element.text = unescape_icu_text(element.text)
        if element is not fragment and element.tail:
            element.tail = unescape_icu_text(element.tail)


def parse_icu_message(dialect: MessageDialect, icu_text: str,
                      source_message: Optional[ParsedMessage] = None, depth: int = 0) -> ParsedMessage:
    def parse_body(raw_body: str, body_depth: int) -> ParsedMessage:
        if is_icu_message_start(raw_body):
            return parse_icu_message(dialect, raw_body, None, body_depth)
        fragment = parse_xml_fragment(raw_body)
        _unescape_text_nodes(fragment)
        return parse_native(dialect, fragment, None, detect_icu=False, depth=body_depth)

    parser = IcuMessageParser(parse_body, dialect.max_nesting_depth)
    icu_message = parser.parse(dialect, icu_text, depth)
    builder = MessageBuilder(dialect, source_message, icu_text, dialect.max_nesting_depth)
    builder.set_icu_message(icu_message)
    return builder.build()


def parse_native(dialect: MessageDialect, element, source_message: Optional[ParsedMessage] = None,
                 detect_icu: bool = True, depth: int = 0) -> ParsedMessage:
    if detect_icu:
        content = get_xml_content(element, dialect.ignored_elements)
        if is_icu_message_start(content):
            return parse_icu_message(dialect, content, source_message, depth)
    builder = MessageBuilder(dialect, source_message, None, dialect.max_nesting_depth)
    _walk(dialect, element, builder, depth)
    return builder.build()


def _walk(dialect: MessageDialect, element, builder: MessageBuilder, depth: int):
    if depth > dialect.max_nesting_depth:
        raise TooDeeplyNestedError(f"elements nested deeper than {dialect.max_nesting_depth} levels",
                                   local_name(element))
    builder.add_text(element.text)
    for child in element:
        if isinstance(child.tag, str):
            _process_element(dialect, child, builder, depth)
        builder.add_text(child.tail)


def _process_element(dialect: MessageDialect, element, builder: MessageBuilder, depth: int):
    element_class = dialect.classify_element(element)
    kind = element_class.kind
    if kind == ElementKind.PLACEHOLDER:
        builder.add_placeholder(element_class.index, element_class.disp)
    elif kind == ElementKind.ICU_MESSAGE_REF:
        builder.add_icu_message_ref(element_class.index, element_class.disp)
    elif kind == ElementKind.START_TAG:
        builder.add_start_tag(element_class.tag_name, element_class.id_counter)
    elif kind == ElementKind.END_TAG:
        builder.add_end_tag(element_class.tag_name)
    elif kind == ElementKind.EMPTY_TAG:
        builder.add_empty_tag(element_class.tag_name, element_class.id_counter)
    elif kind == ElementKind.PAIRED_TAG:
        builder.add_start_tag(element_class.tag_name, element_class.id_counter)
        _walk(dialect, element, builder, depth + 1)
        builder.add_end_tag(element_class.tag_name)
    elif kind == ElementKind.DESCEND:
        _walk(dialect, element, builder, depth + 1)


def _append_text(container, text: str):
    if len(container):
        last = container[-1]
        last.tail = (last.tail or "") + text
    else:
        container.text = (container.text or "") + text


def build_native(dialect: MessageDialect, message: ParsedMessage):
    """Native xml of message, as content of a <fragment> element."""
    icu_message = message.get_icu_message()
    if icu_message is not None:
        return parse_xml_fragment(icu_message.as_native_string())

    root = etree.Element(FRAGMENT_ELEMENT)
    # (container, tag name) of paired elements, root at the bottom
    containers = [(root, None)]
    open_tags = []
    node_number = 0
    native = message.as_display_string()
    for part in message.parts():
        container = containers[-1][0]
        if part.type == ParsedMessagePartType.TEXT:
            _append_text(container, part.text)
        elif part.type == ParsedMessagePartType.PLACEHOLDER:
            container.append(dialect.build_placeholder_node(part, str(node_number)))
            node_number += 1
        elif part.type == ParsedMessagePartType.ICU_MESSAGE_REF:
            container.append(dialect.build_icu_ref_node(part, str(node_number)))
            node_number += 1
        elif part.type == ParsedMessagePartType.EMPTY_TAG:
            container.append(dialect.build_empty_tag_node(part, str(node_number)))
            node_number += 1
        elif part.type == ParsedMessagePartType.START_TAG:
            if len(containers) + len(open_tags) > dialect.max_nesting_depth:
                raise TooDeeplyNestedError(
                    f"tags nested deeper than {dialect.max_nesting_depth} levels", part.tag_name, native
                )
            node = dialect.build_start_tag_node(part, str(node_number))
            node_number += 1
            container.append(node)
            if dialect.paired_tags:
                containers.append((node, part.tag_name))
            else:
                open_tags.append(part.tag_name)
        elif part.type == ParsedMessagePartType.END_TAG:
            if dialect.paired_tags:
                if len(containers) == 1 or containers[-1][1] != part.tag_name:
                    raise UnexpectedCloseTagError(f"unexpected close tag {part.tag_name}", part.tag_name, native)
                containers.pop()
            else:
                if not open_tags or open_tags[-1] != part.tag_name:
                    raise UnexpectedCloseTagError(f"unexpected close tag {part.tag_name}", part.tag_name, native)
                open_tags.pop()
                container.append(dialect.build_end_tag_node(part, str(node_number)))
    if len(containers) > 1 or open_tags:
        tag_name = containers[-1][1] if len(containers) > 1 else open_tags[-1]
        raise UnclosedTagError(f"missing close tag for {tag_name}", tag_name, native)
    return root
