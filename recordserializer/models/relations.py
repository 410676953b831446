"""Relation descriptors linking one model to another."""

import re
from typing import Any, Optional

from recordserializer.models.registry import resolve_model


def snake_case(name: str) -> str:
    """Convert a CamelCase class name to snake_case."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


class Relation:
    """A to-one association declared as a class attribute on a model.

    Reading the attribute on an instance yields the materialized related
    model (or ``None`` while the relation is not loaded); reading it on the
    class yields the relation itself.
    """

    def __init__(self, related: type | str, foreign_key: Optional[str] = None):
        self._related = related
        self._foreign_key = foreign_key
        self.name: Optional[str] = None
        self.owner: Optional[type] = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.owner = owner
        self.name = name

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        return instance.get_relation(self.name)

    def __set__(self, instance: Any, value: Any) -> None:
        instance.set_relation(self.name, value)

    def get_related(self) -> type:
        """Get the class of the related model."""
        if isinstance(self._related, str):
            self._related = resolve_model(self._related)
        return self._related

    def get_foreign_key(self) -> str:
        """Get the name of the attribute holding the related model's key."""
        return self._foreign_key or self._default_foreign_key()

    def _default_foreign_key(self) -> str:
        raise NotImplementedError

    def __repr__(self) -> str:
        related = self._related if isinstance(self._related, str) else self._related.__name__
        return f"<{type(self).__name__}(name={self.name!r}, related={related!r})>"


class BelongsTo(Relation):
    """Inverse side: the owning model stores the foreign key (``author_id``)."""

    def _default_foreign_key(self) -> str:
        return f"{self.name}_id"


class HasOne(Relation):
    """The related model stores a foreign key pointing back at the owner."""

    def _default_foreign_key(self) -> str:
        return f"{snake_case(self.owner.__name__)}_id"
