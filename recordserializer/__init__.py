"""Translate active-record style models to flat representations and back."""

from recordserializer.models import BelongsTo, HasOne, Model, Relation, TimestampMixin
from recordserializer.property_access import PropertyAccessor
from recordserializer.serializer import (
    DateTimeNormalizer,
    ModelNormalizer,
    Serializer,
    create_serializer,
)

__version__ = "0.1.0"

__all__ = [
    "Model",
    "TimestampMixin",
    "Relation",
    "BelongsTo",
    "HasOne",
    "PropertyAccessor",
    "Serializer",
    "ModelNormalizer",
    "DateTimeNormalizer",
    "create_serializer",
]
