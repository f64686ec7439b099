from i18nsupport.tag_mapping import (get_close_tag_placeholder_name, get_ctype_for_tag,
                                     get_empty_tag_placeholder_name, get_start_tag_placeholder_name,
                                     get_tag_name_from_close_tag_placeholder_name,
                                     get_tag_name_from_empty_tag_placeholder_name,
                                     get_tag_name_from_start_tag_placeholder_name, get_type_for_tag,
                                     is_empty_tag_placeholder_name, is_void_tag, parse_id_count_from_name)


def test_start_and_close_names():
    assert get_start_tag_placeholder_name("b") == "START_BOLD_TEXT"
    assert get_start_tag_placeholder_name("a", 1) == "START_LINK_1"
    assert get_start_tag_placeholder_name("mytag") == "START_TAG_MYTAG"
    assert get_close_tag_placeholder_name("b") == "CLOSE_BOLD_TEXT"
    assert get_close_tag_placeholder_name("mytag") == "CLOSE_TAG_MYTAG"


def test_empty_tag_names():
    assert get_empty_tag_placeholder_name("br") == "LINE_BREAK"
    assert get_empty_tag_placeholder_name("img") == "TAG_IMG"
    assert get_empty_tag_placeholder_name("img", 1) == "TAG_IMG_1"


def test_tag_names_from_placeholder_names():
    assert get_tag_name_from_start_tag_placeholder_name("START_BOLD_TEXT") == "b"
    assert get_tag_name_from_start_tag_placeholder_name("START_LINK_1") == "a"
    assert get_tag_name_from_start_tag_placeholder_name("START_TAG_MYTAG") == "mytag"
    assert get_tag_name_from_start_tag_placeholder_name("CLOSE_BOLD_TEXT") is None
    assert get_tag_name_from_close_tag_placeholder_name("CLOSE_TAG_MYTAG") == "mytag"
    assert get_tag_name_from_empty_tag_placeholder_name("LINE_BREAK") == "br"
    assert get_tag_name_from_empty_tag_placeholder_name("TAG_IMG_1") == "img"


def test_not_an_empty_tag():
    assert get_tag_name_from_empty_tag_placeholder_name("INTERPOLATION") is None
    # <b> always has content
    assert not is_empty_tag_placeholder_name("BOLD_TEXT")
    assert not is_empty_tag_placeholder_name("START_BOLD_TEXT")
    # only void elements can be empty tags
    assert get_tag_name_from_empty_tag_placeholder_name("TAG_FOO") is None
    assert get_tag_name_from_empty_tag_placeholder_name("TAG_SPAN_1") is None


def test_id_counter():
    assert parse_id_count_from_name("START_LINK_1") == 1
    assert parse_id_count_from_name("START_BOLD_TEXT") == 0
    assert parse_id_count_from_name("START_HEADING_LEVEL1") == 0


def test_types():
    assert is_void_tag("BR")
    assert not is_void_tag("b")
    assert get_ctype_for_tag("b") == "x-b"
    assert get_ctype_for_tag("br") == "lb"
    assert get_ctype_for_tag("img") == "image"
    assert get_type_for_tag("b") == "fmt"
    assert get_type_for_tag("a") == "link"
    assert get_type_for_tag("span") == "other"
