"""Base class for active-record style models."""

from typing import Any, ClassVar, Optional

from recordserializer.models.descriptor import declared_dates, describe
from recordserializer.models.registry import register_model
from recordserializer.models.relations import snake_case


class Model:
    """A dynamic bag of attributes plus materialized relations.

    Subclasses declare their shape with class attributes::

        class Article(Model):
            hidden = ["secret"]
            dates = ["published_at"]

            author = BelongsTo("Author")

    Setting ``timestamps = True`` (or mixing in ``TimestampMixin``) adds
    ``created_at`` and ``updated_at`` to the date fields.

    Attributes are read and written like ordinary Python attributes
    (``article.title``); names that are declared on the class (relations,
    properties, methods) keep their class behaviour. Assigning one of the
    configuration names ``visible``, ``hidden``, ``dates`` or
    ``timestamps`` on an instance stores a bag entry; attribute-style
    reads still return the class setting, so use ``get_attribute``.

    Mutators follow a naming convention: ``set_<key>_attribute(value)``
    runs instead of a raw assignment, ``get_<key>_attribute(value)``
    transforms the stored value when it is read.
    """

    _is_model_base = True

    # Class-level configuration; assigning these on an instance fills the bag
    _config_names = frozenset({"visible", "hidden", "dates", "timestamps"})

    visible: ClassVar[list[str]] = []
    hidden: ClassVar[list[str]] = []
    dates: ClassVar[list[str]] = []

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        register_model(cls)

    def __init__(self, **attributes: Any):
        object.__setattr__(self, "_attributes", {})
        object.__setattr__(self, "_relations", {})
        object.__setattr__(self, "_visible", list(type(self).visible))
        object.__setattr__(self, "_hidden", list(type(self).hidden))
        for key, value in attributes.items():
            setattr(self, key, value)

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails
        if not name.startswith("_"):
            attributes = self.__dict__.get("_attributes", {})
            if name in attributes:
                return self.get_attribute(name)
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_") or (hasattr(type(self), name) and name not in self._config_names):
            object.__setattr__(self, name, value)
        else:
            self.set_attribute(name, value)

    def __repr__(self) -> str:
        fields = ", ".join(f"{key}={value!r}" for key, value in self._attributes.items())
        return f"<{type(self).__name__}({fields})>"

    # Attributes

    def get_attributes(self) -> dict[str, Any]:
        """Get a copy of the raw attribute bag, in insertion order."""
        return dict(self._attributes)

    def get_attribute(self, key: str) -> Any:
        """
        Read a field by name.

        Resolution order: stored attribute (through its get-mutator, if
        any), materialized relation, ``@property`` on the class. Unknown
        names read as ``None``.
        """
        descriptor = describe(type(self))
        if key in self._attributes or key in descriptor.get_mutators:
            value = self._attributes.get(key)
            if key in descriptor.get_mutators:
                return getattr(self, f"get_{key}_attribute")(value)
            return value
        if key in descriptor.relations:
            return self._relations.get(key)
        if key in descriptor.properties:
            return getattr(self, key)
        return None

    def set_attribute(self, key: str, value: Any) -> "Model":
        """Set an attribute, running its set-mutator when one is declared."""
        if self.has_set_mutator(key):
            getattr(self, f"set_{key}_attribute")(value)
        else:
            self._attributes[key] = value
        return self

    def set_raw_attribute(self, key: str, value: Any) -> "Model":
        """Store a value in the attribute bag without running mutators."""
        self._attributes[key] = value
        return self

    def has_set_mutator(self, key: str) -> bool:
        return key in describe(type(self)).set_mutators

    def has_get_mutator(self, key: str) -> bool:
        return key in describe(type(self)).get_mutators

    def get_dates(self) -> list[str]:
        """Get the names of the fields holding timestamps."""
        return list(declared_dates(type(self)))

    # Visibility

    def get_visible(self) -> list[str]:
        return list(self._visible)

    def set_visible(self, visible: list[str]) -> "Model":
        self._visible = list(visible)
        return self

    def make_visible(self, *names: str) -> "Model":
        """Allow the given fields, removing them from the hidden list."""
        self._hidden = [name for name in self._hidden if name not in names]
        if self._visible:
            self._visible.extend(name for name in names if name not in self._visible)
        return self

    def get_hidden(self) -> list[str]:
        return list(self._hidden)

    def set_hidden(self, hidden: list[str]) -> "Model":
        self._hidden = list(hidden)
        return self

    def make_hidden(self, *names: str) -> "Model":
        self._hidden.extend(name for name in names if name not in self._hidden)
        return self

    # Relations

    def get_foreign_key(self) -> str:
        """Default name of a foreign key pointing at this model (``author_id``)."""
        return f"{snake_case(type(self).__name__)}_id"

    def get_relations(self) -> dict[str, Optional["Model"]]:
        """Get the materialized relations (name to related model or None)."""
        return dict(self._relations)

    def get_relation(self, name: str) -> Optional["Model"]:
        return self._relations.get(name)

    def set_relation(self, name: str, value: Optional["Model"]) -> "Model":
        self._relations[name] = value
        return self

    def unset_relation(self, name: str) -> "Model":
        self._relations.pop(name, None)
        return self

    def relation_loaded(self, name: str) -> bool:
        return name in self._relations


class TimestampMixin:
    """Mixin declaring ``created_at`` and ``updated_at`` as date fields."""

    timestamps: ClassVar[bool] = True
