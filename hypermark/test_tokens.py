"""
Run from the repository root:
$
$  pytest -v hypermark/test_tokens.py

"""

import re, pytest

from hypermark.tags import Tag, VOID_TAGS, tags_regex
from hypermark.strings import decode, encode, EscapeError
from hypermark.tree import Lines, Position, Span


#####################################################################################################################################################
#####
#####  TAGS
#####

def test_001_vocabulary():
    assert len(Tag) == 122
    assert all(tag.keyword == tag.keyword.lower() for tag in Tag)
    assert len({tag.keyword for tag in Tag}) == len(Tag)

    void = {tag.keyword for tag in VOID_TAGS}
    assert void == set("area base br col embed hr img input link meta param source track wbr".split())
    assert Tag.IMG.self_closing and not Tag.DIV.self_closing

    assert Tag.lookup('header') is Tag.HEADER
    assert Tag.lookup('h1') is Tag.H1
    assert str(Tag.H1) == 'h1'
    with pytest.raises(KeyError):
        Tag.lookup('HTML')

def test_002_keyword_order():
    keywords = Tag.keywords()
    assert len(keywords) == len(Tag)
    for short, long in [('head', 'header'), ('b', 'body'), ('s', 'span'), ('col', 'colgroup'), ('a', 'abbr')]:
        assert keywords.index(long) < keywords.index(short)

def test_003_keyword_regex():
    pattern = re.compile(tags_regex())
    assert pattern.match('header {').group() == 'header'
    assert pattern.match('head {').group() == 'head'
    assert pattern.match('b{').group() == 'b'
    for text in ['headers', 'head-x', 'h7', 'Div', 'html5', 'x']:
        assert pattern.match(text) is None


#####################################################################################################################################################
#####
#####  STRINGS
#####

def test_004_decode():
    assert decode('') == ''
    assert decode('plain <text> & more') == 'plain <text> & more'
    assert decode('a\\nb\\tc\\rd') == 'a\nb\tc\rd'
    assert decode('\\b\\f\\/\\\\\\"') == '\b\f/\\"'
    assert decode('\\u{41}\\u{1F600}\\u{10FFFF}') == 'A\U0001F600\U0010FFFF'
    assert decode('line\\\n      continued') == 'linecontinued'
    assert decode('raw\nnewline') == 'raw\nnewline'

def test_005_decode_errors():
    with pytest.raises(EscapeError) as ex_info:
        decode('ab\\x')
    assert ex_info.value.offset == 2

    for body in ['\\', '\\a', '\\u41', '\\u{}', '\\u{1234567}', '\\u{D800}', '\\u{DFFF}', '\\u{110000}', '\\u{12']:
        with pytest.raises(EscapeError):
            decode(body)

def test_006_encode():
    assert encode('') == '""'
    assert encode('say "hi"\n') == '"say \\"hi\\"\\n"'
    assert encode('a\\b') == '"a\\\\b"'
    assert encode('\x00\x1f\x7f') == '"\\u{0}\\u{1F}\x7f"'

    for value in ['', 'żółw \U0001F600', 'tab\t/slash\\ "q"', '\b\f\r\n\x01', 'a\\\n   b']:
        assert decode(encode(value)[1:-1]) == value


#####################################################################################################################################################
#####
#####  POSITIONS
#####

def test_007_lines():
    lines = Lines('ab\ncd\n\nef')
    assert lines.position(0) == Position(1, 1)
    assert lines.position(2) == Position(1, 3)
    assert lines.position(3) == Position(2, 1)
    assert lines.position(6) == Position(3, 1)
    assert lines.position(9) == Position(4, 3)
    assert lines.offset(Position(4, 3)) == 9
    assert lines.span(3, 5) == Span(Position(2, 1), Position(2, 3))

    for offset in range(10):
        assert lines.offset(lines.position(offset)) == offset

    assert Lines('').position(0) == Position(1, 1)
