"""
Serializer for lxml trees that keeps the layout of translation files.

lxml's own pretty printer reformats everything it is given. Translation
files contain elements like <source> and <target> whose content mixes text
and inline markup, where every whitespace character counts. Elements named
in XmlSerializerOptions.mixed_content_elements (and everything below them)
are written exactly as they are, the rest is indented when beautify is set.
"""
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from lxml import etree

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"


@dataclass
class XmlSerializerOptions:
    beautify: bool = False
    indent_string: str = "  "
    mixed_content_elements: Sequence[str] = field(default_factory=tuple)

    def __post_init__(self):
        if self.indent_string and self.indent_string.strip():
            raise ValueError("indent_string must not contain non white characters")


@dataclass
class _Context:
    options: XmlSerializerOptions
    text_filter: Optional[Callable[[str], str]] = None
    skip_elements: Iterable[str] = ()

    def text(self, text: str) -> str:
        if self.text_filter:
            text = self.text_filter(text)
        return escape_text(text)


def escape_text(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace("]]>", "]]&gt;")


def escape_attribute(value: str) -> str:
    return (value.replace("&", "&amp;")
            .replace("<", "&lt;")
            .replace('"', "&quot;")
            .replace("\n", "&#10;")
            .replace("\r", "&#13;")
            .replace("\t", "&#9;"))


def _local_name(node) -> str:
    return etree.QName(node).localname


class XmlSerializer:

    def serialize_to_string(self, node, options: Optional[XmlSerializerOptions] = None,
                            prolog: Optional[str] = None) -> str:
        """
        Render an element (or a whole tree) as text.

        prolog, if given, is written verbatim in front of the root element
        (xml declaration, doctype, leading comments as found in the input).
        """
        ctx = _Context(options or XmlSerializerOptions())
        if isinstance(node, etree._ElementTree):
            root = node.getroot()
            whole_document = True
        else:
            root = node
            whole_document = prolog is not None
        out: List[str] = []
        if prolog is not None:
            out.append(prolog)
        elif whole_document:
            if node.docinfo.xml_version:
                encoding = node.docinfo.encoding or "UTF-8"
                out.append(f'<?xml version="{node.docinfo.xml_version}" encoding="{encoding}"?>\n')
            for sibling in reversed(list(root.itersiblings(preceding=True))):
                self._write_node(sibling, out, ctx, 0, False, {})
                out.append("\n")
        self._write_node(root, out, ctx, 0, False, {"xml": XML_NAMESPACE})
        if whole_document:
            for sibling in root.itersiblings():
                out.append("\n")
                self._write_node(sibling, out, ctx, 0, False, {})
        return "".join(out)

    def serialize_content(self, element, text_filter: Optional[Callable[[str], str]] = None,
                          skip_elements: Iterable[str] = ()) -> str:
        """
        Render the content of an element (text and children, not the element itself).

        Namespaces declared on the element or its ancestors are not repeated.
        text_filter is applied to every text node before escaping,
        children with a local name in skip_elements are left out (their tail is kept).
        """
        ctx = _Context(XmlSerializerOptions(), text_filter, frozenset(skip_elements))
        visible: Dict[Optional[str], str] = {"xml": XML_NAMESPACE}
        visible.update(element.nsmap)
        out: List[str] = []
        if element.text:
            out.append(ctx.text(element.text))
        for child in element:
            if not (isinstance(child.tag, str) and _local_name(child) in ctx.skip_elements):
                self._write_node(child, out, ctx, 0, True, visible)
            if child.tail:
                out.append(ctx.text(child.tail))
        return "".join(out)

    def _write_node(self, node, out: List[str], ctx: _Context, level: int, in_mixed: bool,
                    visible: Dict[Optional[str], str]):
        if node.tag is etree.Comment:
            out.append(f"<!--{node.text or ''}-->")
            return
        if node.tag is etree.ProcessingInstruction:
            if node.text:
                out.append(f"<?{node.target} {node.text}?>")
            else:
                out.append(f"<?{node.target}?>")
            return
        if node.tag is etree.Entity:
            out.append(node.text)
            return

        options = ctx.options
        local = _local_name(node)
        name = f"{node.prefix}:{local}" if node.prefix else local
        declarations, visible_here = self._namespace_declarations(node, visible)

        out.append("<" + name)
        for prefix, uri in declarations:
            attr = f"xmlns:{prefix}" if prefix else "xmlns"
            out.append(f' {attr}="{escape_attribute(uri)}"')
        for key, value in node.attrib.items():
            out.append(f' {self._attribute_name(key, visible_here)}="{escape_attribute(value)}"')

        mixed = in_mixed or local in options.mixed_content_elements
        pretty = options.beautify and not mixed
        children = [child for child in node
                    if not (isinstance(child.tag, str) and _local_name(child) in ctx.skip_elements)]
        text = node.text
        if pretty and text is not None and not text.strip():
            text = None

        if not text and not children:
            out.append("/>")
            return
        out.append(">")

        if not pretty or not children:
            # written as is
            if text:
                out.append(ctx.text(text))
            for child in children:
                self._write_node(child, out, ctx, level + 1, mixed, visible_here)
                if child.tail:
                    out.append(ctx.text(child.tail))
        else:
            indent = options.indent_string
            if text:
                out.append("\n" + indent * (level + 1) + ctx.text(text.strip()))
            for child in children:
                out.append("\n" + indent * (level + 1))
                self._write_node(child, out, ctx, level + 1, False, visible_here)
                if child.tail and child.tail.strip():
                    out.append("\n" + indent * (level + 1) + ctx.text(child.tail.strip()))
            out.append("\n" + indent * level)
        out.append(f"</{name}>")

    @staticmethod
    def _namespace_declarations(node, visible: Dict[Optional[str], str]):
        declarations = []
        visible_here = visible
        for prefix, uri in node.nsmap.items():
            if visible.get(prefix) != uri:
                if visible_here is visible:
                    visible_here = dict(visible)
                visible_here[prefix] = uri
                declarations.append((prefix, uri))
        if node.prefix is None and etree.QName(node).namespace is None and visible_here.get(None):
            # element without namespace below an element with a default namespace
            if visible_here is visible:
                visible_here = dict(visible)
            visible_here[None] = ""
            declarations.append((None, ""))
        return declarations, visible_here

    @staticmethod
    def _attribute_name(key: str, visible: Dict[Optional[str], str]) -> str:
        if not key.startswith("{"):
            return key
        qname = etree.QName(key)
        if qname.namespace == XML_NAMESPACE:
            return "xml:" + qname.localname
        for prefix, uri in visible.items():
            if prefix and uri == qname.namespace:
                return f"{prefix}:{qname.localname}"
        return qname.localname
