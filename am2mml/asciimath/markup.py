"""
Element construction and serialization for the MathML output tree.

A *fragment* is a plain ``list`` of elements; grammar rules build fragments
bottom-up and concatenate them.  Constructs that need exactly one child
(script bases, fraction parts, root arguments) go through :func:`node`,
which wraps anything other than a single element in an ``<mrow>``.
"""
from __future__ import annotations

import copy
import re
import xml.etree.ElementTree as ET
from collections.abc import Iterable

Fragment = list[ET.Element]

MATHML_NS = "http://www.w3.org/1998/Math/MathML"
MISSING_CLOSER = "Missing closing paren"
TOO_DEEP = "Nesting too deep"

# Characters outside the XML 1.0 Char production
_NON_XML_RE = re.compile("[^\t\n\r\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def element(tag: str, children: Iterable[ET.Element] = (), text: str | None = None,
            **attrib: str) -> ET.Element:
    """Return a new element with *children* appended and optional *text*."""
    el = ET.Element(tag, attrib)
    if text is not None:
        el.text = text
    el.extend(children)
    return el


def leaf(tag: str, text: str) -> Fragment:
    """Return a one-element fragment holding a token element such as ``<mi>``."""
    return [element(tag, text=text)]


def row(fragment: Fragment) -> ET.Element:
    return element("mrow", fragment)


def node(fragment: Fragment) -> ET.Element:
    """Collapse *fragment* into exactly one element."""
    if len(fragment) == 1:
        return fragment[0]
    return row(fragment)


def error(message: str) -> Fragment:
    """Inline diagnostic: ``<merror><mtext>message</mtext></merror>``."""
    return [element("merror", [element("mtext", text=message)])]


def xml_safe(text: str) -> str:
    """Replace characters XML cannot carry with U+FFFD."""
    return _NON_XML_RE.sub("\ufffd", text)


def is_xml_char(char: str) -> bool:
    return _NON_XML_RE.match(char) is None


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

def to_string(el: ET.Element) -> str:
    """Serialize *el* to a compact unicode string."""
    return ET.tostring(el, encoding="unicode")


def pretty(el: ET.Element, indent: str = "  ") -> str:
    """Serialize *el* with one element per line, leaving *el* untouched."""
    clone = copy.deepcopy(el)
    ET.indent(clone, space=indent)
    return ET.tostring(clone, encoding="unicode")


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------

def error_messages(el: ET.Element) -> list[str]:
    """Return the text of every ``<merror>`` node under *el*, in document order."""
    return ["".join(err.itertext()) for err in el.iter("merror")]


def count_errors(el: ET.Element) -> int:
    return sum(1 for _ in el.iter("merror"))
