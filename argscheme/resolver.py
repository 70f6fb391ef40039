"""
Argscheme resolver: positional matching and the named-argument overlay.

What this module provides
- Resolver: binds the matcher probes and the reporting options, and resolves
  (schema, arguments) pairs into name → value mappings.
- resolve(schema, arguments, **options): one-shot convenience entry point.
- accepts(schema, **options): decorator resolving a function's call arguments
  before the function runs.
- Outcome: what one schema element did with the argument it was offered.

Positional pass
- Two cursors walk the schema and the arguments. Every schema element is
  offered the argument under the argument cursor (Unset once the arguments run
  out) and answers with an Outcome:
  • CONSUMED: the argument was taken; the argument cursor advances.
  • HELD: the element resolved without it (default or unset); the same
    argument is offered to the next element.
  • FAILED: a fault is pending; the walk stops.
- An optional slot that rejects an argument but declares a default HOLDS it,
  which is what lets f(value, callback) and f(value, label, callback) share a
  schema where label is optional.
- The argument cursor never moves past the last argument, so trailing
  optional slots still receive their defaults.

Named-argument overlay
- When exactly one argument is left and it is a plain mapping, every slot
  whose name is a key of that mapping and whose kinds accept the value is
  set (or overwritten) from it.
- A pending fault survives only if the overlay did not rescue the slot (or,
  for a group, any member) it is tied to.
- Keys that rescued nothing produce an IgnoredNamedArgumentWarning.

Example
    >>> from argscheme import resolve, STRING, FUNCTION, INT, OPTIONAL, REQUIRED
    >>> schema = [
    ...     {"value": INT | REQUIRED},
    ...     {"label": STRING | OPTIONAL, "_default": "untitled"},
    ...     {"callback": FUNCTION | OPTIONAL},
    ... ]
    >>> resolve(schema, [3, print])
    {'value': 3, 'label': 'untitled', 'callback': <built-in function print>}
"""
import functools
from collections.abc import Mapping, Sequence
from enum import Enum
from types import MappingProxyType

from .faults import *
from .faults import null_required, wrong_type, no_type_specified, no_group_match, ignored_named_argument
from .matching import Matcher, isbuffer, iselement, conforms
from .schema import *
from .utils import *


class Outcome(Enum):
    """
    result of offering one argument to one schema element.
    """
    CONSUMED = "consumed"
    HELD = "held"
    FAILED = "failed"


class Resolver:
    """
    Resolve call arguments against a schema of slots and groups.

    Parameters (keyword-only)
    - buffer, element, conforms: probes forwarded to Matcher.
    - shell: bool
      render faults on stderr (and exit with status 1 on errors) instead of
      raising them / emitting warnings.
    - fancy: bool
      render faults inside a rich panel (shell mode).
    - colorful: bool
      colorize rendered faults (shell mode).

    Resolvers are immutable and hold no per-call state; share them freely.
    """

    def __init__(
            self,
            *,
            buffer=isbuffer,
            element=iselement,
            conforms=conforms,
            shell=False,
            fancy=False,
            colorful=True,
    ):
        self.matcher = Matcher(buffer=buffer, element=element, conforms=conforms)
        self.options = MappingProxyType({
            "shell": bool(shell),
            "fancy": bool(fancy),
            "colorful": bool(colorful),
        })

    def __repr__(self):
        return "resolver(matcher=%r, %s)" % (
            self.matcher, ", ".join("%s=%r" % item for item in self.options.items())
        )

    def _slot(self, slot, index, argument, result):
        """
        offer argument to a plain slot; returns (Outcome, pending fault or None).
        """
        if slot.required:
            if isnull(argument):
                return Outcome.FAILED, null_required(index, (slot.name,))
            if not slot.typed:
                return Outcome.FAILED, no_type_specified(index, slot)
            if not self.matcher.matches(argument, slot.kinds, slot.narrow):
                return Outcome.FAILED, wrong_type(index, slot, argument)
            result[slot.name] = argument
            return Outcome.CONSUMED, None

        # optional: an empty argument fills the slot (the default wins when declared)
        if isnull(argument):
            result[slot.name] = coalesce(slot.default, argument)
            return Outcome.CONSUMED, None
        if not slot.typed:
            return Outcome.FAILED, no_type_specified(index, slot)
        if self.matcher.matches(argument, slot.kinds, slot.narrow):
            result[slot.name] = argument
            return Outcome.CONSUMED, None
        if slot.default is not Unset:
            result[slot.name] = slot.default
        return Outcome.HELD, None

    def _group(self, group, index, argument, result):
        """
        offer argument to the members of a group, first match wins.

        a null/undefined argument is only a fault once no member took it
        (injected probes may accept None).
        """
        for member in group.members:
            if not member.typed:
                if isnull(argument):
                    continue
                return Outcome.FAILED, no_type_specified(index, member)
            if self.matcher.matches(argument, member.kinds, member.narrow):
                result[member.name] = argument
                return Outcome.CONSUMED, None
        if isnull(argument):
            return Outcome.FAILED, null_required(index, group.names)
        return Outcome.FAILED, no_group_match(index, group, argument)

    def _overlay(self, schema, arguments, index, result):
        """
        apply a trailing named-argument mapping; returns the rescued slot names.
        """
        if len(arguments) - index != 1 or not isinstance(bag := arguments[index], Mapping):
            return frozenset()

        declared = {slot.name: slot for slot in slots(schema)}
        rescued = set()
        for name, slot in declared.items():
            if name not in bag or not slot.typed:
                continue
            if self.matcher.matches(bag[name], slot.kinds, slot.narrow):
                result[name] = bag[name]
                rescued.add(name)

        for key, value in bag.items():
            if key not in rescued:
                trigger(ignored_named_argument(key, value, declared.get(key, Unset)), **self.options)

        return frozenset(rescued)

    def resolve(self, schema, arguments, /):
        """
        Resolve arguments against schema.

        Parameters
        - schema: sequence of raw slots (mappings), raw groups (sequences of
          mappings), Slot or Group instances.
        - arguments: sequence of actual values, optionally ending with one
          mapping of named overrides.

        Returns
        - dict mapping every declared slot name (group members included) to
          its value; slots nothing resolved hold Unset.

        Raises
        - TypeError / ValueError for a malformed schema or arguments.
        - NullRequiredError, WrongTypeError, NoTypeSpecifiedError or
          NoGroupMatchError when a fault is left unrescued (outside shell mode).
        """
        schema = compile(schema)
        if not isinstance(arguments, Sequence) or isinstance(arguments, (str, bytes, bytearray)):
            raise TypeError("arguments must be a sequence of values")

        result = dict.fromkeys((slot.name for slot in slots(schema)), Unset)
        fault = None
        index = 0

        for element in schema:
            argument = arguments[index] if index < len(arguments) else Unset
            if isinstance(element, Group):
                outcome, fault = self._group(element, index, argument, result)
            else:
                outcome, fault = self._slot(element, index, argument, result)
            if outcome is Outcome.FAILED:
                break
            if outcome is Outcome.CONSUMED and index < len(arguments):
                index += 1

        rescued = self._overlay(schema, arguments, index, result)

        if fault is not None and rescued.isdisjoint(fault.options["names"]):
            trigger(fault, **self.options)

        return result

    __call__ = resolve


_default = Resolver()


def resolve(schema, arguments, /, **options):
    """
    Resolve arguments against schema with a Resolver built from options.

    See Resolver and Resolver.resolve for the accepted options and the result.
    """
    resolver = Resolver(**options) if options else _default
    return resolver.resolve(schema, arguments)


def accepts(schema, /, **options):
    """
    Decorator: resolve the wrapped function's call arguments against schema.

    Positional arguments are matched by the schema; keyword arguments, when
    given, become the trailing named-argument mapping. The wrapped function is
    then called with every declared slot as a keyword argument (Unset for
    slots nothing resolved).

    Usage
        @accepts([
            {"value": INT | REQUIRED},
            {"label": STRING | OPTIONAL, "_default": "untitled"},
            {"callback": FUNCTION | OPTIONAL},
        ])
        def store(value, label, callback): ...

        store(3, print)
        store(3, "three", print)
        store(3, label="three")
    """
    schema = compile(schema)
    resolver = Resolver(**options) if options else _default

    @rename("accepts")
    def wrapper(callback, /):
        if not callable(callback):
            raise TypeError("@accepts() must be applied to a callable")

        @functools.wraps(callback)
        def resolving(*arguments, **named):
            if named:
                arguments = (*arguments, named)
            return callback(**resolver.resolve(schema, arguments))

        resolving.__schema__ = schema
        return resolving

    return wrapper


__all__ = (
    "Outcome",
    "Resolver",
    "resolve",
    "accepts",
)
