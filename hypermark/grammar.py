"""
Grammar of Hypermark: a compact, brace-delimited notation for HTML documents with reusable "component" blocks.

    def Page = [title; lang] {
        html [lang="en"] {
            head { title {"Hyper!"} }
            body { Menu [active="home"] {} main { "Hello" } }
        }
    }

A document is either a sequence of component definitions (def ...) or a sequence of bare markup
elements, text literals and component references. The grammar is written for Parsimonious (PEG):
alternatives are ordered, the first successful one wins. Placeholders %(...)s are filled in
with the tag vocabulary and the reserved words before the grammar is compiled, see parser.Grammar.
"""

########################################################################################################################################################
grammar = r"""

###  DOCUMENT

program          =  ws? module ws?
module           =  definitions / markup

definitions      =  component_def (ws? component_def)*
markup           =  child (ws? child)*

###  COMPONENT DEFINITION

component_def    =  mark_def ws id ws equal ws params ws body
params           =  open_list ws? (name (ws? semicolon ws? name)*)? ws? close_list

###  BODY & CHILDREN

body             =  open_body (ws? child)* ws? close_body
child            =  text / element / component_expr

element          =  tag (ws attributes)? ws body
component_expr   =  id (ws attributes)? (ws body)?
text             =  string ''

###  ATTRIBUTES

attributes       =  open_list ws? key_value (ws? semicolon ws? key_value)* ws? close_list
key_value        =  name ws? equal ws? string

###  TOKENS

mark_def         =  ~"def(?![A-Za-z0-9-])"
tag              =  ~"%(TAGS)s"
id               =  ~"(?!(?:%(RESERVED)s)(?![A-Za-z0-9-]))[A-Za-z-][A-Za-z0-9-]*"
name             =  ~"[A-Za-z-][A-Za-z0-9-]*"                    # unlike `id`, may be equal to a reserved word: title, style, form...
string           =  ~'"(?:[^"\\\\]|\\\\.)*"'s

open_body        =  '{'
close_body       =  '}'
open_list        =  '['
close_list       =  ']'
semicolon        =  ';'
equal            =  '='

ws               =  ~"[ \t\r\n]+"

"""
