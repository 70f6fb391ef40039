"""
Argscheme type matcher.

Decides whether a runtime value satisfies a kind mask. Kinds compose as a union:
the value matches as soon as ONE flag's predicate accepts it.

Predicates
- STRING    str instances.
- FUNCTION  any callable.
- INT       real numbers (bool excluded) holding an integral value; 62.0 counts.
- FLOAT     real numbers (bool excluded); a superset of INT.
- ARRAY     ordered indexable containers (Sequence minus str/bytes/bytearray/memoryview).
- OBJECT    non-primitive values (not None, strings, bytes, numbers, bools
            or callables, which belong to FUNCTION), narrowed by the
            slot's tag when one is given.
- BUFFER    injected probe; bytes, bytearray and memoryview by default.
- DATE      datetime.date instances (datetime included).
- BOOL      bool instances.
- ELEMENT   injected probe; nothing matches by default.

Injected probes
- buffer(value) -> bool
- element(value) -> bool
- conforms(value, narrow) -> bool
  The default conformance check uses isinstance() when the tag is a class
  (runtime-checkable protocols included) and the truth of narrow(value) when
  the tag is any other callable; other tags need a custom probe.
"""
import datetime
import math
import numbers
from collections.abc import Sequence

from .kinds import *
from .utils import *

_BINARY = (bytes, bytearray, memoryview)
_PRIMITIVES = (str, bytes, bytearray, numbers.Number)


def isbuffer(value, /):
    return isinstance(value, _BINARY)


def iselement(value, /):
    return False


def conforms(value, narrow, /):
    if isinstance(narrow, type):
        return isinstance(value, narrow)
    if not callable(narrow):
        raise TypeError("cannot check conformance to %r without a custom 'conforms' probe" % (narrow,))
    return bool(narrow(value))


def _isreal(value):
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _isintegral(value):
    if isinstance(value, numbers.Integral):
        return True
    try:
        return math.isfinite(value) and value == math.floor(value)
    except (TypeError, ValueError, OverflowError):
        return False


class Matcher:
    """
    Kind-mask matcher with pluggable platform probes.

    Parameters (keyword-only)
    - buffer: Callable[[Any], bool]
      "is this a binary buffer" probe used for BUFFER.
    - element: Callable[[Any], bool]
      "is this a UI element" probe used for ELEMENT.
    - conforms: Callable[[Any, Any], bool]
      "does this value conform to narrowing tag X" check used for OBJECT.

    Matchers hold no per-call state and can be shared freely.
    """

    def __init__(self, *, buffer=isbuffer, element=iselement, conforms=conforms):
        for name, probe in (("buffer", buffer), ("element", element), ("conforms", conforms)):
            if not callable(probe):
                raise TypeError(f"matcher {name!r} probe must be callable")
        self.buffer = buffer
        self.element = element
        self.conforms = conforms
        self._predicates = (
            (STRING, self._string),
            (FUNCTION, self._function),
            (INT, self._int),
            (FLOAT, self._float),
            (ARRAY, self._array),
            (OBJECT, self._object),
            (BUFFER, self._buffer),
            (DATE, self._date),
            (BOOL, self._bool),
            (ELEMENT, self._element),
        )

    def __repr__(self):
        return "matcher(buffer=%r, element=%r, conforms=%r)" % (self.buffer, self.element, self.conforms)

    def matches(self, value, kinds, /, narrow=Unset):
        """
        Return True when value satisfies at least one kind flag of kinds.

        Modifier flags in kinds are ignored. A mask without kind flags cannot
        be matched and raises ValueError; the resolver reports that case as a
        "no valid type specified" fault before calling in.
        """
        if not kinds & KINDS:
            raise ValueError("no valid type specified")
        for flag, predicate in self._predicates:
            if kinds & flag and predicate(value, narrow):
                return True
        return False

    __call__ = matches

    def _string(self, value, narrow):
        return isinstance(value, str)

    def _function(self, value, narrow):
        return callable(value)

    def _int(self, value, narrow):
        return _isreal(value) and _isintegral(value)

    def _float(self, value, narrow):
        return _isreal(value)

    def _array(self, value, narrow):
        return isinstance(value, Sequence) and not isinstance(value, (str, *_BINARY))

    def _object(self, value, narrow):
        if value is None or isinstance(value, _PRIMITIVES):
            return False
        if callable(value):
            return False
        return narrow is Unset or bool(self.conforms(value, narrow))

    def _buffer(self, value, narrow):
        return bool(self.buffer(value))

    def _date(self, value, narrow):
        return isinstance(value, datetime.date)

    def _bool(self, value, narrow):
        return isinstance(value, bool)

    def _element(self, value, narrow):
        return bool(self.element(value))


_default = Matcher()


def matches(value, kinds, /, narrow=Unset):
    """
    Match value against kinds with the default probes (see Matcher.matches).
    """
    return _default.matches(value, kinds, narrow)


__all__ = (
    "Matcher",
    "matches",
    "isbuffer",
    "iselement",
    "conforms",
)
