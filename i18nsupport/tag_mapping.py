"""
Mapping between html tag names and the placeholder names used in the
native formats (e.g. <b> is START_BOLD_TEXT ... CLOSE_BOLD_TEXT).

The names follow the ones the Angular extractor generates.
"""
import re
from typing import Optional

TAG_TO_PLACEHOLDER_NAMES = {
    "A": "LINK",
    "B": "BOLD_TEXT",
    "BR": "LINE_BREAK",
    "EM": "EMPHASISED_TEXT",
    "H1": "HEADING_LEVEL1",
    "H2": "HEADING_LEVEL2",
    "H3": "HEADING_LEVEL3",
    "H4": "HEADING_LEVEL4",
    "H5": "HEADING_LEVEL5",
    "H6": "HEADING_LEVEL6",
    "HR": "HORIZONTAL_RULE",
    "I": "ITALIC_TEXT",
    "LI": "LIST_ITEM",
    "LINK": "MEDIA_LINK",
    "OL": "ORDERED_LIST",
    "P": "PARAGRAPH",
    "Q": "QUOTATION",
    "S": "STRIKETHROUGH_TEXT",
    "SMALL": "SMALL_TEXT",
    "SUB": "SUBSTRIPT",
    "SUP": "SUPERSCRIPT",
    "TBODY": "TABLE_BODY",
    "TD": "TABLE_CELL",
    "TFOOT": "TABLE_FOOTER",
    "TH": "TABLE_HEADER_CELL",
    "THEAD": "TABLE_HEADER",
    "TR": "TABLE_ROW",
    "TT": "MONOSPACED_TEXT",
    "U": "UNDERLINED_TEXT",
    "UL": "UNORDERED_LIST",
}

PLACEHOLDER_NAMES_TO_TAG = {name: tag for tag, name in TAG_TO_PLACEHOLDER_NAMES.items()}

# Elements that never have content (written as <br/>)
VOID_ELEMENTS = frozenset([
    "area", "base", "br", "col", "command", "embed", "hr", "img", "input",
    "keygen", "link", "meta", "param", "source", "track", "wbr",
])

START_PREFIX = "START_"
CLOSE_PREFIX = "CLOSE_"
UNKNOWN_TAG_PREFIX = "TAG_"

INTERPOLATION_NAME = "INTERPOLATION"
ICU_NAME = "ICU"

_ID_COUNTER_PATTERN = re.compile(r"_(\d+)$")


def is_void_tag(tag: str) -> bool:
    return tag.lower() in VOID_ELEMENTS


def _base_name(tag: str) -> str:
    upper = tag.upper()
    return TAG_TO_PLACEHOLDER_NAMES.get(upper, UNKNOWN_TAG_PREFIX + upper)


def _with_id_counter(name: str, id_counter: int) -> str:
    if id_counter > 0:
        return f"{name}_{id_counter}"
    return name


def get_start_tag_placeholder_name(tag: str, id_counter: int = 0) -> str:
    """START_BOLD_TEXT, START_LINK_1, START_TAG_MYTAG ..."""
    return _with_id_counter(START_PREFIX + _base_name(tag), id_counter)


def get_close_tag_placeholder_name(tag: str) -> str:
    return CLOSE_PREFIX + _base_name(tag)


def get_empty_tag_placeholder_name(tag: str, id_counter: int = 0) -> str:
    """LINE_BREAK, TAG_IMG, TAG_IMG_1 ..."""
    return _with_id_counter(_base_name(tag), id_counter)


def parse_id_count_from_name(name: str) -> int:
    """The trailing _<n> of a placeholder name, 0 if there is none."""
    match = _ID_COUNTER_PATTERN.search(name)
    if match:
        return int(match.group(1))
    return 0


def strip_id_counter(name: str) -> str:
    return _ID_COUNTER_PATTERN.sub("", name)


def _tag_from_base_name(base: str) -> str:
    if base.startswith(UNKNOWN_TAG_PREFIX):
        return base[len(UNKNOWN_TAG_PREFIX):].lower()
    tag = PLACEHOLDER_NAMES_TO_TAG.get(base)
    if tag:
        return tag.lower()
    return base.lower()


def is_start_tag_placeholder_name(name: str) -> bool:
    return name.startswith(START_PREFIX)


def is_close_tag_placeholder_name(name: str) -> bool:
    return name.startswith(CLOSE_PREFIX)


def get_tag_name_from_start_tag_placeholder_name(name: str) -> Optional[str]:
    if not is_start_tag_placeholder_name(name):
        return None
    return _tag_from_base_name(strip_id_counter(name[len(START_PREFIX):]))


def get_tag_name_from_close_tag_placeholder_name(name: str) -> Optional[str]:
    if not is_close_tag_placeholder_name(name):
        return None
    return _tag_from_base_name(strip_id_counter(name[len(CLOSE_PREFIX):]))


def get_tag_name_from_empty_tag_placeholder_name(name: str) -> Optional[str]:
    """
    Tag name for an empty tag placeholder (LINE_BREAK -> br, TAG_IMG -> img).
    Returns None if the name does not denote an empty tag.
    """
    if is_start_tag_placeholder_name(name) or is_close_tag_placeholder_name(name):
        return None
    tag = _tag_from_base_name(strip_id_counter(name))
    if is_void_tag(tag):
        return tag
    return None


def is_empty_tag_placeholder_name(name: str) -> bool:
    return get_tag_name_from_empty_tag_placeholder_name(name) is not None


def get_ctype_for_tag(tag: str) -> str:
    """ctype attribute used in XLIFF 1.2 <x> elements."""
    tag = tag.lower()
    if tag == "br":
        return "lb"
    if tag == "img":
        return "image"
    return "x-" + tag


def get_type_for_tag(tag: str) -> str:
    """type attribute used in XLIFF 2.0 <ph>/<pc> elements."""
    tag = tag.lower()
    if tag in ("br", "b", "i", "u"):
        return "fmt"
    if tag == "img":
        return "image"
    if tag == "a":
        return "link"
    return "other"
