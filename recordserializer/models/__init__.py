"""Active-record style models."""

from recordserializer.models.base import Model, TimestampMixin
from recordserializer.models.descriptor import FieldKind, ModelDescriptor, describe
from recordserializer.models.relations import BelongsTo, HasOne, Relation

__all__ = [
    "Model",
    "TimestampMixin",
    "Relation",
    "BelongsTo",
    "HasOne",
    "FieldKind",
    "ModelDescriptor",
    "describe",
]
