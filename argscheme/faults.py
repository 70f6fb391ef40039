"""
Argscheme faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every resolution issue.
- ArgumentException / ArgumentWarning: base types that carry message + options
  and know how to render themselves (rich) and how to surface (__trigger__).
- Builders (null_required, wrong_type, no_type_specified, no_group_match,
  ignored_named_argument): the one place where fault copy is written.
- trigger(): central entry point to surface any fault.
- getdoc(): optional description lookup for a code from the host application.

Message contract
- Messages are lowercase, position-first and stable enough to pattern-match:
  they contain "is null or undefined", "should be type", "no valid type
  specified" or "should be one of", together with the argument index, the
  declared name(s) and the expected kind(s).

Integration
- The resolver builds faults, keeps them pending while the named-argument
  overlay may still rescue them, then calls trigger(fault, **options).
- Outside shell mode exceptions are raised and warnings go through
  warnings.warn; in shell mode both are rendered on stderr via rich, and an
  exception ends the process with status 1.
"""
import copy
import inspect
import sys
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .kinds import describe
from .utils import *

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the resolver (stable identifiers).

    grouping
    - presence (211xx)
      • NULL_REQUIRED
    - typing (212xx)
      • WRONG_TYPE, NO_TYPE_SPECIFIED, NO_GROUP_MATCH
    - warnings (22xxx)
      • IGNORED_NAMED_ARGUMENT

    numeric ranges encode domains and leave room for additions; normalize()
    lets the host remap them to custom labels while keeping code-stability.
    """
    # --- presence errors (211xx) ---
    NULL_REQUIRED           = 21101

    # --- typing errors (212xx) ---
    WRONG_TYPE              = 21201
    NO_TYPE_SPECIFIED       = 21202
    NO_GROUP_MATCH          = 21203

    # --- warnings (22xxx) ---
    IGNORED_NAMED_ARGUMENT  = 22101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, kind):
    main = __import__("__main__")
    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))
    colorful = fault.options.get("colorful", True)
    fancy = fault.options.get("fancy", False)

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), styles[style])

    header = Text.assemble(
        "[ ",
        text(getattr(main, "__prog__", "argscheme"), "prog-name"),
        " — ",
        text(fault.options["code"].normalize() if "code" in fault.options else "", "code"),
        " | ",
        text(fault.options.get("title", kind).title(), kind + "-title"),
        " ]"
    )
    message = text(fault.message, kind + "-message")
    hint = Text.assemble(text(" → ", "hint-arrow"), text(fault.options.get("hint"), "hint"))
    body = [message, hint]
    if docs := fault.options.get("docs"):
        body.append(text(docs, "docs"))

    if fancy:
        return Panel(Group(*body), title=header, title_align="left")

    return Group(header, *body)


class ArgumentException(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | UnsetType)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
            "docs": "underline #00E5FF dim",  # host documentation footer
        }, "error")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class NullRequiredError(ArgumentException): ...
class WrongTypeError(ArgumentException): ...
class NoTypeSpecifiedError(ArgumentException): ...
class NoGroupMatchError(ArgumentException): ...


class ArgumentWarning(ABC, Warning):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | UnsetType)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "warning-message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
            "docs": "underline #FFB400 dim",  # host documentation footer
        }, "warning")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class IgnoredNamedArgumentWarning(ArgumentWarning): ...


def _label(names):
    return ", ".join(map(repr, names))


def _prefix(index, names):
    return "argument %d (%s) from %s position" % (index, _label(names), ordinal(index + 1))


def null_required(index, names, /):
    """
    build the fault for a null/undefined value where one is required.

    names holds the slot name, or every member name when the fault is tied to
    a group (the group variant also carries group=True).
    """
    return NullRequiredError(
        "%s is null or undefined but it must be not null" % _prefix(index, names),
        title="null required",
        code=FaultCode.NULL_REQUIRED,
        index=index,
        name=names[0] if len(names) == 1 else Unset,
        names=tuple(names),
        group=len(names) > 1,
        hint="pass a value for %s or name it in a trailing mapping" % _label(names),
        docs=getdoc(FaultCode.NULL_REQUIRED),
    )


def wrong_type(index, slot, value, /):
    """
    build the fault for a value whose runtime type the slot does not accept.
    """
    expected = describe(slot.kinds, slot.narrow)
    actual = type(value).__name__
    return WrongTypeError(
        "%s should be type %s, but it was type %s with value %s" % (
            _prefix(index, (slot.name,)), expected, actual, value
        ),
        title="wrong type",
        code=FaultCode.WRONG_TYPE,
        index=index,
        name=slot.name,
        names=(slot.name,),
        expected=expected,
        actual=actual,
        value=value,
        hint="pass a %s for %r" % (describe(slot.kinds, slot.narrow, all=True), slot.name),
        docs=getdoc(FaultCode.WRONG_TYPE),
    )


def no_type_specified(index, slot, /):
    """
    build the fault for a slot whose mask carries no kind flag at all.
    """
    return NoTypeSpecifiedError(
        "%s has no valid type specified" % _prefix(index, (slot.name,)),
        title="no type specified",
        code=FaultCode.NO_TYPE_SPECIFIED,
        index=index,
        name=slot.name,
        names=(slot.name,),
        hint="declare at least one kind for %r in the schema" % slot.name,
        docs=getdoc(FaultCode.NO_TYPE_SPECIFIED),
    )


def no_group_match(index, group, value, /):
    """
    build the fault for a value that no member of a group accepts.
    """
    expected = ", ".join(describe(member.kinds, member.narrow) for member in group.members)
    actual = type(value).__name__
    return NoGroupMatchError(
        "%s should be one of %s, but it was type %s with value %s" % (
            _prefix(index, group.names), expected, actual, value
        ),
        title="no group match",
        code=FaultCode.NO_GROUP_MATCH,
        index=index,
        name=Unset,
        names=group.names,
        group=True,
        expected=expected,
        actual=actual,
        value=value,
        hint="pass a value accepted by one of %s" % _label(group.names),
        docs=getdoc(FaultCode.NO_GROUP_MATCH),
    )


def ignored_named_argument(key, value, slot=Unset, /):
    """
    build the warning for a named-argument key that rescued nothing.

    slot is the declared slot with that name when one exists (the value then
    had the wrong type), Unset otherwise.
    """
    if slot is Unset:
        message = "named argument %r was ignored because no slot has that name" % (key,)
        hint = "check the spelling of %r" % (key,)
    else:
        message = "named argument %r was ignored because it should be type %s, but it was type %s" % (
            key, describe(slot.kinds, slot.narrow), type(value).__name__
        )
        hint = "pass a %s for %r" % (describe(slot.kinds, slot.narrow, all=True), key)
    return IgnoredNamedArgumentWarning(
        message,
        title="ignored named argument",
        code=FaultCode.IGNORED_NAMED_ARGUMENT,
        name=key,
        value=value,
        hint=hint,
        docs=getdoc(FaultCode.IGNORED_NAMED_ARGUMENT),
    )


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - outside shell mode, exceptions are raised and warnings are emitted; in
      shell mode, both are rendered via the rich console.

    typical options
    - shell, fancy, colorful, and any extra context the reporter may want to show.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings. when
    not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "ArgumentException",
    "NullRequiredError",
    "WrongTypeError",
    "NoTypeSpecifiedError",
    "NoGroupMatchError",
    "ArgumentWarning",
    "IgnoredNamedArgumentWarning",
    "FaultCode",
    "trigger",
    "getdoc",
)
