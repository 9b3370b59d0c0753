from hypermark.tree import Position, Lines

########################################################################################################################################################

class HyperError(Exception):
    """
    Base class for all errors raised by hypermark. Knows the position in source code where the error occurred:
    `pos` is a 0-based character offset, `line` and `column` are 1-based, `text` is a snippet of source code at `pos`.
    """
    pos    = None
    line   = None
    column = None
    text   = None

    def __init__(self, msg, source = None, pos = None):
        if source is not None and pos is not None:
            self.pos = pos
            self.line, self.column = Lines(source).position(pos)
            self.text = source[pos:pos+20] or 'end of input'
        self.reason = msg
        super().__init__(self.make_msg(msg))

    def make_msg(self, msg):
        if self.pos is None: return msg
        return msg + " at line %s, column %s (%s)" % (self.line, self.column, self.text)

    @property
    def position(self):
        if self.pos is None: return None
        return Position(self.line, self.column)


class ParseFailure(HyperError, SyntaxError):
    """
    Source code doesn't conform to the grammar. Parsing is all-or-nothing: the first failure aborts the entire parse.
    `expected` is the name of the grammar rule that couldn't be matched at the furthest position reached.
    """
    expected = None

    def __init__(self, msg, source = None, pos = None, expected = None):
        self.expected = expected
        super().__init__(msg, source, pos)

########################################################################################################################################################

class IncompleteParse(ParseFailure):
    """A prefix of the input was parsed correctly, but the remaining part couldn't be."""

class BadEscape(ParseFailure):
    """Invalid escape sequence in a string literal."""

class NestingTooDeep(ParseFailure):
    """Nesting of { } blocks exceeds the configured limit (max_depth)."""
