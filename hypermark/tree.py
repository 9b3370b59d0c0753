"""
Generic machinery for converting a raw parse tree produced by Parsimonious into a tree of custom node classes.

Every grammar rule `name` that survives rewriting is represented by an instance of `NODES.x<name>` class
(or the generic `NODES.node` if no such class exists). Each node remembers the (start, end) offsets
of the source text it was built from, so that source positions (spans) are available for *every* node
without any per-rule bookkeeping.
"""

import re
from bisect import bisect_right
from collections import namedtuple


#####################################################################################################################################################
#####
#####  POSITIONS & SPANS
#####

Position = namedtuple('Position', 'line column')        # 1-based line number and column (in code points)
Span     = namedtuple('Span', 'start end')              # pair of Positions: [start, end)


class Lines:
    """Index of line starts in a text; converts 0-based character offsets to Positions and back."""

    def __init__(self, text):
        self.starts = [0] + [m.end() for m in re.finditer('\n', text)]

    def position(self, offset):
        line = bisect_right(self.starts, offset)
        return Position(line, offset - self.starts[line-1] + 1)

    def offset(self, position):
        line, column = position
        return self.starts[line-1] + column - 1

    def span(self, start, end):
        return Span(self.position(start), self.position(end))


#####################################################################################################################################################
#####
#####  TREE
#####

class ParsimoniousTree:
    """
    Base class for syntax trees built on top of Parsimonious parse trees. Subclasses must set `parser` and `NODES`,
    and may configure the rewriting process through _ignore_, _reduce_, _compact_ lists of rule names.
    """

    NODES  = None               # container class that holds node classes, x<rule_name> for each rule that needs custom behavior
    parser = None               # Parsimonious Grammar instance used to parse input text

    ###  Configuration of rewriting process  ###

    _ignore_  = ""              # nodes that will be pruned from the tree, together with their subtrees
    _reduce_  = ""              # nodes that will be replaced with a list of their children
    _compact_ = ""              # nodes that will be replaced with their child if there is exactly 1 child AFTER rewriting
    _reduce_anonym_ = True      # reduce all anonymous nodes, i.e., nodes generated by unnamed expressions: literals, groupings (...)

    ###  Output of parsing  ###

    text  = None                # full text of the input string fed to the parser
    lines = None                # Lines index of `text`, for translating offsets into positions
    ast   = None                # raw AST generated by Parsimonious
    root  = None                # root node of the final tree after rewriting

    class node:
        """Base class for all nodes of a rewritten tree."""

        type     = None         # name of the grammar rule that produced this node
        tree     = None         # the tree this node belongs to
        fulltext = None         # full source text, for retrieving the text of this node
        pos      = None         # (start, end) offsets of this node's text in `fulltext`
        children = None         # list of child nodes after rewriting

        def __init__(self, tree, astnode, children):
            self.tree     = tree
            self.type     = astnode.expr_name
            self.fulltext = astnode.full_text
            self.pos      = (astnode.start, astnode.end)
            self.children = children

        def setup(self):
            """Called right after the node is created and its children are rewritten. Override in subclasses."""

        def text(self):
            """The exact source text this node was built from."""
            return self.fulltext[self.pos[0]:self.pos[1]]

        @property
        def span(self):
            return self.tree.lines.span(*self.pos)

        @property
        def line(self):
            return self.span.start.line

        @property
        def column(self):
            return self.span.start.column

        def info(self):
            """One-line description of this node, for debugging."""
            start, end = self.span
            return "%s [%s:%s-%s:%s]" % (self.type, start.line, start.column, end.line, end.column)

        def dump(self, indent = ''):
            lines = [indent + self.info()]
            for c in self.children:
                lines.append(c.dump(indent + '  '))
            return '\n'.join(lines)

        def __str__(self): return "<%s>" % self.__class__.__name__


    def __init__(self, text):
        """
        :param text: input text to be parsed
        """
        self.text  = text
        self.lines = Lines(text)
        self.ast   = self._parse(text)

        self._ignore  = set(self._ignore_.split())
        self._reduce  = set(self._reduce_.split())
        self._compact = set(self._compact_.split())

        nodes = self._rewrite(self.ast)
        assert len(nodes) == 1, f"rewriting produced {len(nodes)} root nodes instead of 1"
        self.root = nodes[0]

    def _parse(self, text):
        return self.parser.parse(text)

    def _rewrite(self, astnode):
        """
        Convert a Parsimonious node and its subtree to a list of custom nodes: typically one node,
        but reduced/ignored nodes yield a list of their children or an empty list.
        """
        name = astnode.expr_name
        if name in self._ignore: return []

        children = [node for child in astnode.children for node in self._rewrite(child)]

        if name in self._reduce or (self._reduce_anonym_ and not name):
            return children
        if name in self._compact and len(children) == 1:
            return children

        klass = getattr(self.NODES, 'x' + name, self.NODES.node)
        node = klass(self, astnode, children)
        node.setup()
        return [node]

    def __str__(self):
        return self.root.dump() if self.root is not None else "<empty tree>"
