"""
Argscheme kind flags (the type bitmask of a slot).

Scope
- Kind: sealed IntFlag holding the kind flags (what a value may be) and the two
  modifier flags (whether a value must be present).
- Module-level constants mirroring every member, so schemas read naturally:
      {"path": STRING | REQUIRED}
      {"count": INT | FLOAT | OPTIONAL, "_default": 1}
- describe(): human-readable rendering of a mask for fault messages.

Semantics
- A slot mask is the OR of one or more kind flags and exactly one modifier
  (group members may omit the modifier).
- Kinds compose as a union: a value matches when ANY kind flag accepts it.
- INT and FLOAT overlap: every integral number also satisfies FLOAT.

Canonical order
- String, Function, Int, Float, Array, Object, Buffer, Date, Bool, Element.
  describe() walks the flags in this order (not in bit order) and, unless
  asked for all of them, stops at the first one found.
"""
from enum import IntFlag, unique

from .utils import Unset


@unique
class Kind(IntFlag):
    """
    kind and modifier flags (stable bit values).

    kinds (what the value may be)
    - STRING, FUNCTION, INT, FLOAT, BUFFER, OBJECT, DATE, BOOL, ELEMENT, ARRAY

    modifiers (how the slot treats absent values)
    - OPTIONAL: null/undefined is accepted (the default is used when declared).
    - REQUIRED: null/undefined is a fault. NOTNULL is an alias.
    """
    STRING   = 0x1
    FUNCTION = 0x1 << 1
    INT      = 0x1 << 2
    FLOAT    = 0x1 << 3
    BUFFER   = 0x1 << 4
    OBJECT   = 0x1 << 5
    DATE     = 0x1 << 6
    BOOL     = 0x1 << 7
    ELEMENT  = 0x1 << 8
    ARRAY    = 0x1 << 9

    OPTIONAL = 0x1 << 10
    REQUIRED = 0x1 << 11

    @property
    def kinds(self):
        """the mask with modifier flags stripped."""
        return self & KINDS

    @property
    def modifiers(self):
        """the mask with kind flags stripped."""
        return self & MODIFIERS


STRING = Kind.STRING
FUNCTION = Kind.FUNCTION
INT = Kind.INT
FLOAT = Kind.FLOAT
BUFFER = Kind.BUFFER
OBJECT = Kind.OBJECT
DATE = Kind.DATE
BOOL = Kind.BOOL
ELEMENT = Kind.ELEMENT
ARRAY = Kind.ARRAY

OPTIONAL = Kind.OPTIONAL
REQUIRED = NOTNULL = Kind.REQUIRED

KINDS = STRING | FUNCTION | INT | FLOAT | BUFFER | OBJECT | DATE | BOOL | ELEMENT | ARRAY
MODIFIERS = OPTIONAL | REQUIRED

# Rendering order and labels (not bit order).
_LABELS = (
    (STRING, "String"),
    (FUNCTION, "Function"),
    (INT, "Int"),
    (FLOAT, "Float"),
    (ARRAY, "Array"),
    (OBJECT, "Object"),
    (BUFFER, "Buffer"),
    (DATE, "Date"),
    (BOOL, "Bool"),
    (ELEMENT, "UI Element"),
)


def _tagname(narrow):
    return getattr(narrow, "__qualname__", None) or getattr(narrow, "__name__", None) or repr(narrow)


def describe(mask, /, narrow=Unset, *, all=False):
    """
    render the kind flags of a mask for messages.

    by default only the first flag found in canonical order is rendered: this is
    a summary, not a full union listing ("String" for STRING | INT). pass
    all=True to render every flag joined by " | ". OBJECT carries the narrowing
    tag when one is given ("Object (Photo)"). a mask without kind flags renders
    as "unknown".
    """
    labels = []
    for flag, label in _LABELS:
        if not mask & flag:
            continue
        if flag is OBJECT and narrow is not Unset:
            label = "%s (%s)" % (label, _tagname(narrow))
        if not all:
            return label
        labels.append(label)
    return " | ".join(labels) or "unknown"


__all__ = (
    "Kind",
    "STRING",
    "FUNCTION",
    "INT",
    "FLOAT",
    "BUFFER",
    "OBJECT",
    "DATE",
    "BOOL",
    "ELEMENT",
    "ARRAY",
    "OPTIONAL",
    "REQUIRED",
    "NOTNULL",
    "KINDS",
    "MODIFIERS",
    "describe",
)
