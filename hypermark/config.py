"""
Global configuration: default values of parser and renderer settings.
Each of them can be overridden per parse() call with a keyword argument of the same name in lower case.
"""

#####################################################################################################################################################
#####
#####  PARSING
#####

# maximum nesting depth of { } blocks; deeper documents are rejected before parsing, because the packrat parser
# descends ~15 Python frames per nesting level and would otherwise hit the interpreter's recursion limit
MAX_DEPTH = 40

# keywords that can never be used as identifiers, in addition to the tag vocabulary
RESERVED = ['def', 'import']


#####################################################################################################################################################
#####
#####  RENDERING
#####

DOCTYPE = "<!DOCTYPE html>"     # prepended to every <html> element

ESCAPE = True                   # if True, text and attribute values are HTML-escaped during rendering
