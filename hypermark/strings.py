"""
String literals: decoding of "..." literals found in source code into text values, and encoding in the opposite direction.

Escape sequences:
    \\n \\r \\t \\b \\f \\\\ \\/ \\"    -- single characters
    \\u{1F600}                  -- Unicode code point given by 1-6 hex digits
    \\ followed by whitespace    -- line continuation: the backslash and the whole whitespace run are dropped
"""

import re


ESCAPES = {'n': '\n', 'r': '\r', 't': '\t', 'b': '\b', 'f': '\f', '\\': '\\', '/': '/', '"': '"'}

_ESCAPE    = re.compile(r'\\(?:u\{([0-9A-Fa-f]{1,6})\}|([nrtbf\\/"])|([ \t\r\n]+))')
_BACKSLASH = re.compile(r'\\')


class EscapeError(ValueError):
    """Invalid escape sequence. `offset` is the position of the backslash relative to the start of the literal's body."""
    def __init__(self, msg, offset):
        ValueError.__init__(self, msg)
        self.offset = offset


def decode(body):
    """
    Convert the `body` of a string literal (text between the quotes) to its value.
    Raise EscapeError if an escape sequence is malformed.
    """
    out = []
    pos = 0
    while True:
        slash = _BACKSLASH.search(body, pos)
        if slash is None:
            out.append(body[pos:])
            return ''.join(out)

        start = slash.start()
        out.append(body[pos:start])
        match = _ESCAPE.match(body, start)
        if match is None:
            raise EscapeError(f"invalid escape sequence '{body[start:start+2]}' in string literal", start)

        hexcode, char, _ = match.groups()
        if hexcode:
            code = int(hexcode, 16)
            if code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
                raise EscapeError(f"\\u{{{hexcode}}} is not a valid Unicode code point", start)
            out.append(chr(code))
        elif char:
            out.append(ESCAPES[char])

        pos = match.end()


_ENCODE = {'\\': '\\\\', '"': '\\"', '\n': '\\n', '\r': '\\r', '\t': '\\t', '\b': '\\b', '\f': '\\f'}

def encode(value):
    """Inverse of decode(): convert a text `value` to a complete string literal, with quotes."""
    body = ''.join(_ENCODE.get(c) or (f'\\u{{{ord(c):X}}}' if ord(c) < 0x20 else c) for c in value)
    return f'"{body}"'
