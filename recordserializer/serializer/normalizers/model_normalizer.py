"""Normalizer translating models to and from flat representations."""

import logging
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any, Optional

from recordserializer.config import get_settings
from recordserializer.exceptions import (
    CircularReferenceError,
    ConfigurationError,
    ConstructionError,
    MaxDepthExceededError,
)
from recordserializer.models.base import Model
from recordserializer.models.descriptor import FieldKind, describe
from recordserializer.property_access import PropertyAccessor
from recordserializer.serializer.interfaces import Normalizer, SerializerAwareMixin

logger = logging.getLogger(__name__)

DEPTH_KEY = "depth"
PATH_KEY = "path"
VISITING_KEY = "visiting"

SCALAR_TYPES = (str, int, float, bool)


def _get_attributes(model: Model) -> dict[str, Any]:
    return model.get_attributes()


def _child_path(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


class ModelNormalizer(SerializerAwareMixin):
    """Normalizer for ``Model`` instances.

    Extraction decides which field names of a model are emitted: attribute
    keys, plus the visible list, with populated relations replacing their
    foreign keys, minus the hidden list. Reconstruction builds a model from
    a representation, coercing date fields and rebuilding nested relations.

    The normalizer keeps no state between calls. Nested values are handed
    back to the serializer it is composed with.
    """

    def __init__(
        self,
        property_accessor: Optional[PropertyAccessor] = None,
        attributes_getter: Optional[Callable[[Model], dict[str, Any]]] = None,
        max_depth: Optional[int] = None,
    ):
        """
        Initialize the normalizer.

        Args:
            property_accessor: Used to read the values of extracted fields.
            attributes_getter: Returns the full attribute bag of a model.
                               Defaults to ``Model.get_attributes``.
            max_depth: Deepest relation nesting followed. If None, uses settings.
        """
        self.property_accessor = property_accessor or PropertyAccessor()
        self.attributes_getter = attributes_getter or _get_attributes
        self.max_depth = get_settings().max_depth if max_depth is None else max_depth

    def set_serializer(self, serializer: Normalizer) -> None:
        if not isinstance(serializer, Normalizer):
            raise ConfigurationError("Expected the serializer passed to be a normalizer.")
        super().set_serializer(serializer)

    # Normalization

    def supports_normalization(self, data: Any, format: Optional[str] = None) -> bool:
        return isinstance(data, Model)

    def extract_attributes(
        self, obj: Model, format: Optional[str] = None, context: Optional[dict] = None
    ) -> list[str]:
        """
        Get the names of the fields to emit for a model, in output order.

        Args:
            obj: Model to inspect (not modified)
            format: Target format hint
            context: Serialization context

        Returns:
            Attribute keys in insertion order, visible-only names appended,
            populated relations in place of their foreign keys, hidden names
            removed.
        """
        names = dict.fromkeys(self.attributes_getter(obj))

        visible = obj.get_visible()
        if visible:
            names.update(dict.fromkeys(visible))

        descriptor = describe(type(obj))
        for relation_name, related in obj.get_relations().items():
            if related is None:
                continue
            relation = descriptor.relation(relation_name)
            foreign_key = relation.get_foreign_key() if relation else related.get_foreign_key()
            names.pop(foreign_key, None)
            names[relation_name] = None

        for hidden in obj.get_hidden():
            names.pop(hidden, None)

        return list(names)

    def normalize(self, obj: Model, format: Optional[str] = None, context: Optional[dict] = None) -> dict[str, Any]:
        """
        Normalize a model into a representation.

        Raises:
            CircularReferenceError: If the model is already being normalized
                                    further up the relation chain
            MaxDepthExceededError: If relations nest deeper than ``max_depth``
        """
        context = dict(context or {})
        path = context.get(PATH_KEY, "")
        depth = context.get(DEPTH_KEY, 0)
        visiting = context.get(VISITING_KEY, frozenset())

        if id(obj) in visiting:
            raise CircularReferenceError(obj)
        self._check_depth(depth, path)

        child_context = {**context, DEPTH_KEY: depth + 1, VISITING_KEY: visiting | {id(obj)}}

        data: dict[str, Any] = {}
        for name in self.extract_attributes(obj, format, context):
            value = self.property_accessor.get_property(obj, name)
            if value is not None and not isinstance(value, SCALAR_TYPES):
                value = self._get_serializer().normalize(
                    value, format, {**child_context, PATH_KEY: _child_path(path, name)}
                )
            data[name] = value
        return data

    # Denormalization

    def supports_denormalization(self, data: Any, type_: type, format: Optional[str] = None) -> bool:
        return isinstance(type_, type) and issubclass(type_, Model) and type_ is not Model

    def denormalize(
        self,
        data: Mapping[str, Any],
        type_: type,
        format: Optional[str] = None,
        context: Optional[dict] = None,
    ) -> Model:
        """
        Build a model of ``type_`` from a representation.

        Date fields are coerced through the serializer unless the model
        declares a set-mutator for them. Keys naming a relation are rebuilt
        recursively when their value is a mapping; scalar values for a
        relation are not assigned. Every other key is set as an attribute.

        Args:
            data: Representation (not modified)
            type_: Concrete model class
            format: Source format hint
            context: Serialization context

        Returns:
            New model instance

        Raises:
            ConstructionError: If ``type_`` cannot be instantiated without arguments
            MaxDepthExceededError: If relations nest deeper than ``max_depth``
        """
        context = dict(context or {})
        path = context.get(PATH_KEY, "")
        depth = context.get(DEPTH_KEY, 0)
        self._check_depth(depth, path)

        try:
            obj = type_()
        except Exception as e:
            raise ConstructionError(type_, e) from e

        data = dict(data)
        dates = set(obj.get_dates())
        for key in [key for key in data if key in dates]:
            if obj.has_set_mutator(key) or data[key] is None:
                continue
            data[key] = self._get_serializer().denormalize(
                data[key], datetime, format, {**context, PATH_KEY: _child_path(path, key)}
            )

        descriptor = describe(type_)
        for name, value in data.items():
            if descriptor.kind_of(name) is not FieldKind.RELATION:
                obj.set_attribute(name, value)
                continue

            if isinstance(value, Mapping):
                related = self.denormalize(
                    value,
                    descriptor.relation(name).get_related(),
                    format,
                    {**context, DEPTH_KEY: depth + 1, PATH_KEY: _child_path(path, name)},
                )
                obj.set_relation(name, related)
                continue

            # TODO: decide whether a scalar should populate the foreign key
            logger.debug(f"Ignoring non-mapping value for relation {type_.__name__}.{name}")

        return obj

    def _check_depth(self, depth: int, path: str) -> None:
        if depth > self.max_depth:
            raise MaxDepthExceededError(self.max_depth, path)

    def _get_serializer(self) -> Normalizer:
        if self.serializer is None:
            raise ConfigurationError("No serializer set; nested values cannot be handled.")
        return self.serializer
