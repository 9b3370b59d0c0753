"""
Hypermark: a compact, brace-delimited notation for HTML5 documents, with reusable component blocks.

    from hypermark import parse, render
    program = parse('def Main = [] { html { body { h1 {"Hello"} } } }')
    render(program)         # '<!DOCTYPE html><html><body><h1>Hello</h1></body></html>'
"""

from hypermark.errors import HyperError, ParseFailure, IncompleteParse, BadEscape, NestingTooDeep
from hypermark.tags import Tag
from hypermark.tree import Position, Span
from hypermark.parser import parse, render, compile, unparse, HypermarkParser, HypermarkAST
from hypermark.parser import Program, Module, Import, ComponentDef, Id, Name, Body, TextNode, Element, Attributes, KeyValue, ComponentExpr
