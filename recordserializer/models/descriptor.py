"""Per-class field descriptors.

A model class is inspected once; the resulting ``ModelDescriptor`` tells
the normalizer whether a field name denotes a plain attribute, a date or a
relation, and which mutators the class declares.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache

from recordserializer.models.relations import Relation

SET_MUTATOR = re.compile(r"^set_(?P<key>.+)_attribute$")
GET_MUTATOR = re.compile(r"^get_(?P<key>.+)_attribute$")

CREATED_AT = "created_at"
UPDATED_AT = "updated_at"


class FieldKind(str, Enum):
    """What a field name resolves to on a model class."""

    ATTRIBUTE = "attribute"
    RELATION = "relation"
    DATE = "date"


@dataclass(frozen=True)
class ModelDescriptor:
    """Capabilities of a model class, keyed by field name."""

    model_class: type
    relations: dict[str, Relation] = field(default_factory=dict)
    dates: tuple[str, ...] = ()
    set_mutators: frozenset[str] = frozenset()
    get_mutators: frozenset[str] = frozenset()
    properties: frozenset[str] = frozenset()

    def kind_of(self, name: str) -> FieldKind:
        if name in self.relations:
            return FieldKind.RELATION
        if name in self.dates:
            return FieldKind.DATE
        return FieldKind.ATTRIBUTE

    def relation(self, name: str) -> Relation | None:
        return self.relations.get(name)


def declared_dates(model_class: type) -> tuple[str, ...]:
    """Date fields of a model class, timestamp columns included."""
    dates = list(getattr(model_class, "dates", ()))
    if getattr(model_class, "timestamps", False):
        for name in (CREATED_AT, UPDATED_AT):
            if name not in dates:
                dates.append(name)
    return tuple(dates)


@lru_cache(maxsize=None)
def describe(model_class: type) -> ModelDescriptor:
    """Build (once) the descriptor of a model class."""
    relations: dict[str, Relation] = {}
    set_mutators: set[str] = set()
    get_mutators: set[str] = set()
    properties: set[str] = set()

    # Walk from the base down so subclasses override their parents.
    for klass in reversed(model_class.__mro__):
        # Methods of the Model base itself are API, not mutators
        if klass is object or "_is_model_base" in vars(klass):
            continue
        for name, member in vars(klass).items():
            if isinstance(member, Relation):
                relations[name] = member
            elif isinstance(member, property):
                properties.add(name)
            elif callable(member):
                if match := SET_MUTATOR.match(name):
                    set_mutators.add(match.group("key"))
                elif match := GET_MUTATOR.match(name):
                    get_mutators.add(match.group("key"))

    return ModelDescriptor(
        model_class=model_class,
        relations=relations,
        dates=declared_dates(model_class),
        set_mutators=frozenset(set_mutators),
        get_mutators=frozenset(get_mutators),
        properties=frozenset(properties),
    )
