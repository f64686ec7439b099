"""
Helpers around lxml trees: parsing, namespace agnostic lookup and
edits that keep the indentation of the surrounding document intact.
"""
import re
from typing import Iterable, List, Optional

from lxml import etree

from .errors import InvalidFileError, MessageSyntaxError
from .xml_serializer import XmlSerializer

FRAGMENT_ELEMENT = "fragment"

_WHITESPACE = re.compile(r"\s*")


def local_name(element) -> Optional[str]:
    if not isinstance(element.tag, str):
        return None
    return etree.QName(element).localname


def default_namespace(element) -> Optional[str]:
    return element.nsmap.get(None) or None


def qualified_name(reference, name: str) -> str:
    """Tag for a new element living in the default namespace of reference."""
    namespace = default_namespace(reference)
    if namespace:
        return f"{{{namespace}}}{name}"
    return name


def find_child(element, name: str):
    for child in element:
        if local_name(child) == name:
            return child
    return None


def find_children(element, name: str) -> List:
    return [child for child in element if local_name(child) == name]


def find_descendants(element, name: str) -> List:
    return element.xpath(f'.//*[local-name()="{name}"]')


def find_first_descendant(element, name: str):
    found = find_descendants(element, name)
    return found[0] if found else None


def _xml_parser():
    return etree.XMLParser(remove_blank_text=False, encoding="utf-8", resolve_entities=False)


def parse_xml_string(xml_string: str, filename: Optional[str] = None):
    """Parse a whole document, returns the root element."""
    try:
        return etree.fromstring(xml_string.encode("utf-8"), _xml_parser())
    except etree.XMLSyntaxError as e:
        raise InvalidFileError(f"File \"{filename}\" is not well-formed xml: {e}", filename) from e


def parse_xml_fragment(content: str, namespace: Optional[str] = None):
    """
    Parse mixed content (text and elements) into a dummy <fragment> element.
    Elements without prefix end up in namespace, if given.
    """
    ns_declaration = f' xmlns="{namespace}"' if namespace else ""
    wrapped = f"<{FRAGMENT_ELEMENT}{ns_declaration}>{content or ''}</{FRAGMENT_ELEMENT}>"
    try:
        return etree.fromstring(wrapped.encode("utf-8"), _xml_parser())
    except etree.XMLSyntaxError as e:
        raise MessageSyntaxError(f"invalid xml fragment: {e}", content) from e


def get_xml_content(element, skip_elements: Iterable[str] = ()) -> str:
    """Content of element as xml string, without the element itself."""
    if element is None:
        return ""
    return XmlSerializer().serialize_content(element, skip_elements=skip_elements)


def get_text_content(element) -> Optional[str]:
    if element is None:
        return None
    return "".join(element.itertext())


def clear_content(element, keep: Iterable[str] = ()):
    """Remove text and children. Children named in keep stay (with their tails)."""
    element.text = None
    for child in list(element):
        if local_name(child) in keep:
            continue
        remove_element(child, keep_tail=False)


def set_xml_content(element, content: str, keep: Iterable[str] = ()):
    """Replace the content of element by the parsed xml string content."""
    keep = tuple(keep)
    fragment = parse_xml_fragment(content, default_namespace(element))
    clear_content(element, keep)
    kept = [child for child in element]
    if kept:
        last = kept[-1]
        last.tail = (last.tail or "") + (fragment.text or "")
    else:
        element.text = fragment.text
    for child in list(fragment):
        element.append(child)


def _is_blank(text: Optional[str]) -> bool:
    return not text or not text.strip()


def insert_after(new_element, reference):
    """Insert new_element as next sibling of reference, reusing the indentation."""
    new_element.tail = reference.tail
    if not _is_blank(reference.tail):
        # the text after reference now follows new_element
        reference.tail = None
    reference.addnext(new_element)


def insert_before(new_element, reference):
    previous = reference.getprevious()
    indent = previous.tail if previous is not None else reference.getparent().text
    new_element.tail = indent if _is_blank(indent) else None
    reference.addprevious(new_element)


def insert_first(parent, new_element):
    if len(parent):
        insert_before(new_element, parent[0])
    else:
        append_child(parent, new_element)


def append_child(parent, new_element):
    """Append new_element as last child, indented like its siblings."""
    children = list(parent)
    if not children:
        new_element.tail = parent.text if _is_blank(parent.text) else None
        parent.append(new_element)
        return
    last = children[-1]
    if not _is_blank(last.tail):
        new_element.tail = None
        parent.append(new_element)
        return
    before_last = children[-2].tail if len(children) > 1 else parent.text
    new_element.tail = last.tail
    if _is_blank(before_last):
        last.tail = before_last
    parent.append(new_element)


def remove_element(element, keep_tail: bool = True):
    """
    Remove element from its parent.
    A tail with text is kept (moved to the previous node), a blank tail
    replaces the indentation in front of the removed element.
    """
    parent = element.getparent()
    if parent is None:
        return
    tail = element.tail
    previous = element.getprevious()
    if keep_tail and tail:
        if _is_blank(tail):
            if previous is not None:
                previous.tail = tail
            else:
                parent.text = tail
        elif previous is not None:
            previous.tail = (previous.tail or "") + tail
        else:
            parent.text = (parent.text or "") + tail
    parent.remove(element)


def split_prolog(xml_string: str) -> str:
    """
    Everything in front of the root element (xml declaration, doctype,
    comments, processing instructions and whitespace), as found in the input.
    """
    pos = 0
    length = len(xml_string)
    if xml_string.startswith("\ufeff"):
        pos = 1
    while pos < length:
        pos = _WHITESPACE.match(xml_string, pos).end()
        if xml_string.startswith("<?", pos):
            end = xml_string.find("?>", pos)
            if end < 0:
                break
            pos = end + 2
        elif xml_string.startswith("<!--", pos):
            end = xml_string.find("-->", pos)
            if end < 0:
                break
            pos = end + 3
        elif xml_string.startswith("<!DOCTYPE", pos):
            end = _doctype_end(xml_string, pos)
            if end < 0:
                break
            pos = end
        else:
            break
    return xml_string[:pos]


def _doctype_end(xml_string: str, pos: int) -> int:
    brackets = 0
    quote = None
    for i in range(pos, len(xml_string)):
        ch = xml_string[i]
        if quote:
            if ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
        elif ch == "[":
            brackets += 1
        elif ch == "]":
            brackets -= 1
        elif ch == ">" and brackets == 0:
            return i + 1
    return -1
