r"""
Argscheme schema elements and extraction.

Overview
- Slot: one named, typed, optionally-defaulted argument position.
- Group: an ordered set of alternative slots competing for one argument position.
- extract(raw): normalize one raw schema element into a Slot or a Group.
- compile(schema): extract every element and enforce schema-wide invariants.

Raw forms (decided structurally, never by a flag)
- Slot: a mapping with exactly one "name" key whose value is the kind mask,
  plus the optional reserved keys "_default" and "_type":
      {"label": STRING | OPTIONAL, "_default": "untitled"}
      {"photo": OBJECT | REQUIRED, "_type": Photo}
- Group: a (non-string) sequence of raw slots; modifiers are optional on members:
      [{"path": STRING}, {"descriptor": INT}]

Validation highlights (schema mistakes are programming errors, raised eagerly)
- names must be non-empty strings and unique across the whole schema,
  group members included.
- masks must be integers made only of known Kind bits.
- a standalone slot carries exactly one of REQUIRED / OPTIONAL; a slot never
  carries both.
- a narrowing tag ("_type") is only meaningful with OBJECT.
- groups are not empty and never nested.

Quick example:
    >>> from argscheme import compile, STRING, INT, OPTIONAL, REQUIRED
    >>> compile([
    ...     {"value": INT | REQUIRED},
    ...     {"label": STRING | OPTIONAL, "_default": "untitled"},
    ... ])
    (slot(name='value', ...), slot(name='label', ...))
"""
import functools
import operator
import re
from collections.abc import Mapping, Sequence

from .kinds import *
from .utils import *


class SchemaType(type):
    """
    Metaclass giving schema elements a stable, introspectable surface.

    Responsibilities
    - Derive __typename__ from the class name (used in messages and reprs).
    - Expose the names in __introspectable__ as read-only properties via mirror(),
      unless the class body already defines them.
    - Provide __repr__/__rich_repr__ built from those properties.
    - Seal the resulting classes against subclassing.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ()) if name not in namespace
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        @rename("__init_subclass__")
        def __init_subclass__(cls, **options):  # NOQA: F-841
            raise TypeError(f"type {self.__name__!r} is not an acceptable base type")
        self.__init_subclass__ = classmethod(__init_subclass__)

        return self


def _sanitize_slot(cls, metadata, /):
    """
    Internal: validate and normalize slot metadata in place.

    - name: non-empty string.
    - mask: int (bool rejected) made only of Kind bits; split into 'kinds'
      (modifiers stripped) and 'modifier' (Unset when the mask has none).
    - narrow: any narrowing tag (a class or a predicate for the default
      conformance check); requires OBJECT.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} name must be a string")
    elif not name:
        raise ValueError(f"{cls.__typename__} name cannot be empty")

    if not isinstance(mask := metadata.pop("mask"), int) or isinstance(mask, bool):
        raise TypeError(f"{cls.__typename__} {name!r} mask must be an integer")
    elif unknown := mask & ~int(KINDS | MODIFIERS):
        raise ValueError(f"{cls.__typename__} {name!r} mask has unknown bits {unknown:#x}")
    elif mask & MODIFIERS == MODIFIERS:
        raise ValueError(f"{cls.__typename__} {name!r} cannot be both required and optional")

    metadata["kinds"] = Kind(mask).kinds
    metadata["modifier"] = Kind(mask).modifiers or Unset

    if metadata["narrow"] is not Unset and not metadata["kinds"] & OBJECT:
        raise ValueError(f"{cls.__typename__} {name!r} '_type' requires the OBJECT kind")


class Slot(metaclass=SchemaType):
    """
    One named, typed, optionally-defaulted argument position.

    Properties
    - name: str
    - kinds: Kind (modifier flags stripped; may be empty, which the resolver
      reports as "no valid type specified")
    - modifier: REQUIRED | OPTIONAL | Unset (group members only)
    - default: declared default value, or Unset when none was declared
      (None is a legitimate default)
    - narrow: narrowing tag consulted only for OBJECT, or Unset
    """

    __introspectable__ = (
        "name",
        "kinds",
        "modifier",
        "default",
        "narrow",
    )

    def __new__(cls, name, mask, /, default=Unset, narrow=Unset):
        metadata = {
            "name": name,
            "mask": mask,
            "default": default,
            "narrow": narrow,
        }
        _sanitize_slot(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @property
    def default(self):
        """the declared default, returned as-is (containers are not frozen)."""
        return self._default

    @property
    def narrow(self):
        return self._narrow

    @property
    def required(self):
        return self._modifier == REQUIRED

    @property
    def optional(self):
        return self._modifier == OPTIONAL

    @property
    def typed(self):
        """whether at least one kind flag is set."""
        return bool(self._kinds)

    def __rich__(self):
        return "[bold]%s[/bold]: %s" % (self._name, describe(self._kinds, self._narrow, all=True))


class Group(metaclass=SchemaType):
    """
    Ordered alternatives for a single argument position.

    Members are tried in declaration order; the first one whose kinds accept
    the argument receives it and every sibling stays unset.

    Properties
    - members: tuple[Slot, ...]
    - names: tuple[str, ...] (member names, in order)
    """

    __introspectable__ = (
        "members",
    )

    def __new__(cls, *members):
        if not members:
            raise ValueError(f"{cls.__typename__} must declare at least one member")

        self = super().__new__(cls)
        self._members = tuple(extract(member, member=True) for member in members)
        return self

    @property
    def names(self):
        return tuple(member.name for member in self._members)

    def __rich__(self):
        return " | ".join(member.__rich__() for member in self._members)


def extract(raw, /, *, member=False):
    """
    Normalize a raw schema element into a Slot or a Group.

    - Slot / Group instances pass through (after the same checks).
    - Mapping → Slot: the reserved keys "_default" and "_type" are lifted out,
      the single remaining key is the name and its value the mask.
    - Sequence (non-string) → Group of raw slots.

    Parameters
    - raw: the element to normalize.
    - member: True while extracting group members; members may omit the
      modifier and cannot be groups themselves.

    Raises
    - TypeError: unsupported element, nested group, missing modifier, or a
      mapping that does not declare exactly one name.
    """
    if isinstance(raw, Mapping):
        default = Unset
        narrow = Unset
        names = []
        for key, value in raw.items():
            if key == "_default":
                default = value
            elif key == "_type":
                narrow = value
            else:
                names.append(key)
        if len(names) != 1:
            raise TypeError("raw slot must declare exactly one name, but %d were given" % len(names))
        name, = names
        raw = Slot(name, raw[name], default=default, narrow=narrow)
    elif isinstance(raw, Sequence) and not isinstance(raw, (str, bytes, bytearray)):
        if member:
            raise TypeError("groups cannot be nested")
        raw = Group(*raw)

    if isinstance(raw, Group):
        if member:
            raise TypeError("groups cannot be nested")
        return raw
    if isinstance(raw, Slot):
        if not member and raw.modifier is Unset:
            raise TypeError("slot %r must be either required or optional" % raw.name)
        return raw

    raise TypeError("schema element must be a mapping, a sequence, a slot or a group, not %r" % type(raw).__name__)


def slots(schema, /):
    """
    Iterate every slot of an already compiled schema, flattening groups.
    """
    for element in schema:
        if isinstance(element, Group):
            yield from element.members
        else:
            yield element


def compile(schema, /):
    """
    Extract every element of a raw schema and check schema-wide invariants.

    Returns
    - tuple[Slot | Group, ...] ready for the resolver.

    Raises
    - TypeError: schema is not a sequence, or an element is malformed.
    - ValueError: a slot name is declared more than once (groups included).
    """
    if not isinstance(schema, Sequence) or isinstance(schema, (str, bytes, bytearray)):
        raise TypeError("schema must be a sequence of slots and groups")

    compiled = tuple(extract(element) for element in schema)

    names = set()
    for slot in slots(compiled):
        if slot.name in names:
            raise ValueError("slot name %r is declared more than once" % slot.name)
        names.add(slot.name)

    return compiled


__all__ = (
    "Slot",
    "Group",
    "extract",
    "slots",
    "compile",
)

# Keep the metaclass out of star-imports and docs.
del SchemaType
