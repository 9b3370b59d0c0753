# -*- coding: utf-8 -*-
"""
Parser and HTML renderer of Hypermark documents.

    >>> compile('html { head { title {"Hyper!"} } }')
    '<!DOCTYPE html><html><head><title>Hyper!</title></head></html>'

Processing goes in one direction: source text > Parsimonious AST > tree of NODES.* (with spans) > HTML text.
"""

import re, logging
from collections import defaultdict
from xml.sax.saxutils import escape as html_escape

from parsimonious.grammar import Grammar as Parsimonious
from parsimonious.exceptions import ParseError

from hypermark import config
from hypermark.errors import ParseFailure, IncompleteParse, BadEscape, NestingTooDeep
from hypermark.grammar import grammar
from hypermark.strings import decode, encode, EscapeError
from hypermark.tags import Tag, tags_regex
from hypermark.tree import ParsimoniousTree as BaseTree

logger = logging.getLogger(__name__)


#####################################################################################################################################################
#####
#####  UTILITIES
#####

_BRACES = re.compile(r'"(?:[^"\\]|\\.)*"?|[{}]', re.S)         # string literals are matched as a whole, to skip braces inside them

def check_nesting(text, max_depth):
    """
    Raise NestingTooDeep if { } blocks in `text` are nested deeper than `max_depth`.
    This is checked on raw text before parsing, because the parser itself is recursive
    and would exceed the interpreter's stack on deeply nested input.
    Return the offset of the first `{` that opens the deepest block, or None if there are no blocks.
    """
    depth = deepest = 0
    offset = None
    for match in _BRACES.finditer(text):
        brace = match.group()
        if brace == '{':
            depth += 1
            if depth > max_depth:
                raise NestingTooDeep(f"blocks nested deeper than {max_depth} levels", text, match.start())
            if depth > deepest:
                deepest, offset = depth, match.start()
        elif brace == '}':
            depth -= 1
    return offset


# human-readable names of grammar rules, for error messages
RULES = {
    'ws':               "whitespace",
    'program':          "component definitions or markup",
    'module':           "component definitions or markup",
    'definitions':      "a component definition",
    'markup':           "a text, element or component",
    'id':               "an identifier",
    'name':             "a name",
    'tag':              "a tag name",
    'string':           "a string literal",
    'text':             "a string literal",
    'body':             "a { } block",
    'element':          "an element",
    'component_expr':   "a component",
    'child':            "a text, element or component",
    'attributes':       "an attribute list [name=\"value\"; ...]",
    'key_value':        "an attribute name=\"value\"",
    'params':           "a parameter list [name; ...]",
    'mark_def':         "'def'",
    'open_body':        "'{'",
    'close_body':       "'}'",
    'open_list':        "'['",
    'close_list':       "']'",
    'semicolon':        "';'",
    'equal':            "'='",
    'component_def':    "a component definition",
}

def expected(expr):
    """Human-readable description of a Parsimonious expression that failed to match."""
    if expr is None: return "valid input"
    return RULES.get(expr.name) or expr.name or expr.as_rule()


#####################################################################################################################################################
#####
#####  GRAMMAR
#####

class Grammar(Parsimonious):

    default = None      # class-level default instance, shared by all parsers; Parsimonious grammars are stateless

    def __init__(self, reserved = config.RESERVED):
        """
        :param reserved: words that can't be used as identifiers, in addition to the tag keywords
        """
        placeholders = {
            'TAGS':     tags_regex(),
            'RESERVED': '|'.join(Tag.keywords() + list(reserved)),
        }
        super(Grammar, self).__init__(grammar % placeholders)


Grammar.default = Grammar()


#####################################################################################################################################################
#####
#####  RENDERING STATE
#####

class State:
    """Settings of a particular render() run, passed down the tree."""

    ENTITIES = {'"': "&quot;"}       # extra escapes for attribute values, which are always put in double quotes

    def __init__(self, escape = config.ESCAPE, doctype = config.DOCTYPE):
        self.escape  = escape
        self.doctype = doctype

    def text(self, value):
        return html_escape(value) if self.escape else value

    def attr(self, name, value):
        if self.escape: value = html_escape(value, self.ENTITIES)
        return f'{name}="{value}"'


#####################################################################################################################################################
#####
#####  NODES
#####

class NODES(object):
    """A lexical container for definitions of all tree node classes."""

    class node(BaseTree.node):

        def render(self, state):
            """Convert this subtree to HTML. Rendering never fails on a tree that was successfully parsed."""
            return self._render_all(self.children, state)

        def unparse(self):
            """Convert this subtree back to (canonical) Hypermark source code."""
            return self.text()

        @staticmethod
        def _render_all(nodes, state):
            return ''.join(n.render(state) for n in nodes)


    ###  DOCUMENT  ###

    class xprogram(node):
        """Root of the tree. Holds exactly one module."""
        module = None

        def setup(self):
            assert len(self.children) == 1
            self.module = self.children[0]

        @property
        def components(self):
            return self.module.components

        def __getitem__(self, name):
            """A top-level component definition, for isolated rendering."""
            return self.module.components[name]

        def unparse(self):
            return self.module.unparse()

    class xmodule(node):
        """
        Sequence of statements: either component definitions, or markup (elements, texts, component references)
        when the document contains no definitions.
        """
        statements = None
        components = None       # {name: xcomponent_def}, in order of first definition; a redefinition replaces the earlier one

        def setup(self):
            self.statements = self.children
            self.components = {}
            for stmt in self.statements:
                if isinstance(stmt, NODES.xcomponent_def):
                    self.components[stmt.name] = stmt

        def unparse(self):
            return '\n'.join(s.unparse() for s in self.statements)

    class ximport(node):
        """Import statement. Reserved: the keyword exists, but no syntax produces this node yet."""
        def render(self, state):    return ''
        def unparse(self):          return ''

    class xcomponent_def(node):
        """Definition of a component: def Name = [param1; param2] { body }"""
        id         = None       # <id> node with the name of the component
        name       = None
        attributes = None       # list of <name> nodes of declared parameters, in order of declaration, repetitions included
        body       = None

        def setup(self):
            self.id   = self.children[0]
            self.name = self.id.name
            self.attributes = self.children[1:-1]
            self.body = self.children[-1]
            assert all(isinstance(attr, NODES.xid) for attr in self.attributes)
            assert self.body.type == 'body'

        def render(self, state):
            return self.body.render(state)          # the header (name, parameters) produces no output

        def unparse(self):
            params = '; '.join(attr.name for attr in self.attributes)
            return f"def {self.name} = [{params}] {self.body.unparse()}"


    ###  BODY & CHILDREN  ###

    class xbody(node):
        """Block of 0+ children in { }."""

        def unparse(self):
            if not self.children: return '{}'
            return '{ ' + ' '.join(c.unparse() for c in self.children) + ' }'

    class xelement(node):
        """Occurrence of an HTML tag:  tag [name="value"; ...] { body }"""
        tag        = None       # Tag
        attributes = None       # <attributes> node, or None
        body       = None       # <body> node; always present, but not rendered for void tags

        def setup(self):
            self.tag = self.children[0].value
            for c in self.children[1:]:
                if c.type == 'attributes': self.attributes = c
                elif c.type == 'body':     self.body = c

        def render(self, state):
            name  = self.tag.keyword
            attrs = self.attributes.render(state) if self.attributes else ''
            start = f"<{name}{attrs}>"
            if self.tag is Tag.HTML and state.doctype:
                start = state.doctype + start
            if self.tag.void:
                return start
            return start + self.body.render(state) + f"</{name}>"

        def unparse(self):
            head = [self.tag.keyword]
            if self.attributes: head.append(self.attributes.unparse())
            head.append(self.body.unparse())
            return ' '.join(head)

    class xcomponent_expr(node):
        """
        Occurrence of a component:  Name [name="value"; ...] { body }
        The name and attributes are kept in the tree, but they're not resolved against any definition:
        rendering outputs the body alone, or nothing if the body is missing.
        """
        id         = None
        name       = None
        attributes = None       # <attributes> node, or None
        body       = None       # <body> node, or None

        def setup(self):
            self.id   = self.children[0]
            self.name = self.id.name
            for c in self.children[1:]:
                if c.type == 'attributes': self.attributes = c
                elif c.type == 'body':     self.body = c

        def render(self, state):
            return self.body.render(state) if self.body else ''

        def unparse(self):
            parts = [self.name]
            if self.attributes: parts.append(self.attributes.unparse())
            if self.body: parts.append(self.body.unparse())
            return ' '.join(parts)

    class xtext(node):
        """Text child: a string literal."""
        value = None

        def setup(self):
            self.value = self.children[0].value

        def render(self, state):
            return state.text(self.value)

        def unparse(self):
            return encode(self.value)


    ###  ATTRIBUTES  ###

    class xattributes(node):
        """
        List of attributes: [name1="value1"; name2="value2" ...]
        Names are unique: a repeated name overwrites the earlier value but keeps its original position.
        """
        attr = None             # {name: value}, in order of first occurrence

        def setup(self):
            self.attr = {}
            for kv in self.children:
                self.attr[kv.key] = kv.value

        def render(self, state):
            return ''.join(' ' + state.attr(name, value) for name, value in self.attr.items())

        def unparse(self):
            return '[' + '; '.join(f"{name}={encode(value)}" for name, value in self.attr.items()) + ']'

    class xkey_value(node):
        key   = None
        value = None

        def setup(self):
            assert len(self.children) == 2
            self.key   = self.children[0].name
            self.value = self.children[1].value


    ###  TOKENS  ###

    class xid(node):
        name = None
        def setup(self):            self.name = self.text()
        def render(self, state):    return ''
        def info(self):             return super().info() + f" {self.name}"

    class xname(xid):
        """Attribute or parameter name. Unlike <id>, it can be equal to a tag keyword."""

    class xtag(node):
        value = None            # Tag
        def setup(self):            self.value = Tag.lookup(self.text())
        def render(self, state):    return ''
        def info(self):             return super().info() + f" {self.value}"

    class xstring(node):
        """String literal. Its `value` is the decoded text between the quotes."""
        value = None

        def setup(self):
            try:
                self.value = decode(self.text()[1:-1])
            except EscapeError as ex:
                raise BadEscape(str(ex), self.fulltext, self.pos[0] + 1 + ex.offset) from None

        def info(self):
            return super().info() + f" {self.value!r}"


#####################################################################################################################################################
#####
#####  HypermarkAST
#####

class HypermarkAST(BaseTree):

    NODES  = NODES
    parser = None

    ###  Configuration of rewriting process  ###

    # nodes that will be ignored during rewriting (pruned from the tree)
    _ignore_ = "ws mark_def open_body close_body open_list close_list semicolon equal"

    # nodes that will be replaced with a list of their children
    _reduce_ = "definitions markup params child"

    ###  Run-time parameters of parsing & rendering  ###

    config_default = {
        'escape':       config.ESCAPE,          # HTML-escape text and attribute values during rendering
        'doctype':      config.DOCTYPE,         # string to be put before every <html> element; None for no doctype
        'max_depth':    config.MAX_DEPTH,       # max. nesting depth of { } blocks
        'verbose':      False,                  # if True, the rewritten tree is logged at DEBUG level
    }
    config  = None
    deepest = None              # offset of the `{` that opens the most deeply nested block

    def __init__(self, text, **config):
        """
        :param text: input document to be parsed
        :param config: overrides of `config_default`
        """
        unknown = set(config) - set(self.config_default)
        if unknown: raise TypeError(f"unknown configuration option(s): {', '.join(sorted(unknown))}")

        self.config = self.config_default.copy()
        self.config.update(config)
        self.parser = Grammar.default

        self.deepest = check_nesting(text, self.config['max_depth'])
        super(HypermarkAST, self).__init__(text)

        if self.config['verbose']:
            logger.debug("rewritten tree:\n%s", self)

    def _match(self, text):
        """Run the default rule of the grammar on `text`. Return the (possibly partial) match and the furthest failure."""
        error = ParseError(text)
        node  = self.parser.default_rule.match_core(text, 0, defaultdict(dict), error)
        return node, error

    def _parse(self, text):
        """
        Parse `text` with the default rule of the grammar. Unlike Parsimonious' Grammar.parse(), on an incomplete parse
        this reports the furthest position that any rule managed to reach, not just the end of the longest successful prefix.
        """
        try:
            node, error = self._match(text)
        except RecursionError:
            raise NestingTooDeep("document too deeply nested for the parser", text, self.deepest or 0) from None

        if node is not None and node.end == len(text):
            return node

        what = expected(error.expr)
        pos  = max(error.pos, 0)
        exc  = ParseFailure
        if node is not None:
            exc = IncompleteParse
            if error.pos < node.end:
                pos, what = node.end, "end of input"

        # whitespace missing at the end of input: tell what should follow it
        if pos == len(text) and error.expr is not None and error.expr.name == 'ws':
            _, after = self._match(text + ' ')
            if after.pos == len(text) + 1 and after.expr.name != 'ws':
                what = expected(after.expr)

        msg = f"unexpected end of input, expected {what}" if pos >= len(text) else f"expected {what}"
        raise exc(msg, text, pos, expected = what)

    def render(self, node = None):
        if node is None: node = self.root
        state = State(escape = self.config['escape'], doctype = self.config['doctype'])
        return node.render(state)


#####################################################################################################################################################
#####
#####  API
#####

def parse(source, **config):
    """Parse `source` text and return the root node of its tree (Program). Raise ParseFailure on syntax errors."""
    return HypermarkAST(source, **config).root

def render(node):
    """Render a Program, or any other node of a parsed tree, to HTML. Never fails."""
    return node.tree.render(node)

def compile(source, **config):
    """Parse and render `source` in one step."""
    return render(parse(source, **config))

def unparse(node):
    """Convert a Program, or any other node, back to Hypermark source code, in canonical formatting."""
    return node.unparse()


class HypermarkParser:
    """
    Parser of Hypermark documents with a fixed configuration.
    """
    def __init__(self, **config):
        self.config = config

    def parse(self, source):
        return parse(source, **self.config)

    def compile(self, source):
        return render(self.parse(source))


Program       = NODES.xprogram
Module        = NODES.xmodule
Import        = NODES.ximport
ComponentDef  = NODES.xcomponent_def
Id            = NODES.xid
Name          = NODES.xname
Body          = NODES.xbody
TextNode      = NODES.xtext
Element       = NODES.xelement
Attributes    = NODES.xattributes
KeyValue      = NODES.xkey_value
ComponentExpr = NODES.xcomponent_expr

