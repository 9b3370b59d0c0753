"""
Vocabulary of HTML tags recognized by the grammar.

Every tag is a member of the closed enumeration `Tag`. The member's value is a pair (keyword, void):
the lowercase keyword that selects the tag in source code and is printed in output markup,
and a flag that marks void (self-closing) elements, like <br> or <img>, whose body and closing tag are never rendered.
"""

import re
from enum import Enum


########################################################################################################################################################
#####
#####  HTML VOCABULARY
#####

_HTML_TAGS_VOID    = "area base br col embed hr img input link meta param source track wbr".split()
_HTML_TAGS_NONVOID = "a abbr acronym address applet article aside audio b basefont bdi bdo big blockquote body " \
                     "button canvas caption center cite code colgroup data datalist dd del details dfn dialog dir " \
                     "div dl dt em fieldset figcaption figure font footer form frame frameset h1 h2 h3 h4 h5 h6 " \
                     "head header html i iframe ins kbd label legend li main map mark meter nav noframes noscript " \
                     "object ol optgroup option output p picture pre progress q rp rt ruby s samp script section " \
                     "select small span strike strong style sub summary sup svg table tbody td template textarea " \
                     "tfoot th thead time title tr tt u ul var video".split()


########################################################################################################################################################
#####
#####  TAG ENUMERATION
#####

class TagEnum(Enum):
    """Base class of the Tag enumeration. Members are created below from the vocabulary lists."""

    def __init__(self, keyword, void):
        self.keyword = keyword      # canonical lowercase name, used both in source code and in output markup
        self.void    = void         # True for self-closing tags

    @property
    def self_closing(self):
        return self.void

    @classmethod
    def lookup(cls, keyword):
        """Tag selected by a given `keyword`. Raise KeyError if the keyword is not in the vocabulary."""
        return _BY_KEYWORD[keyword]

    @classmethod
    def keywords(cls):
        """
        All keywords in the order they must be tried when matching a prefix of the input:
        longer keywords first, so that none of them is ever shadowed by its own prefix (head/header, b/body...).
        """
        return sorted((tag.keyword for tag in cls), key = lambda kw: (-len(kw), kw))

    def __str__(self):
        return self.keyword


def _members():
    tags = [(name, False) for name in _HTML_TAGS_NONVOID] + [(name, True) for name in _HTML_TAGS_VOID]
    tags.sort()
    return [(name.upper(), (name, void)) for name, void in tags]

Tag = TagEnum('Tag', _members())

_BY_KEYWORD = {tag.keyword: tag for tag in Tag}

VOID_TAGS = frozenset(tag for tag in Tag if tag.void)


def tags_regex():
    """
    Regex pattern (a string) that matches any tag keyword, provided that it's not followed by an identifier character;
    the latter condition makes keyword matching independent of the order of alternatives.
    """
    words = '|'.join(re.escape(kw) for kw in Tag.keywords())
    return f"(?:{words})(?![A-Za-z0-9-])"
