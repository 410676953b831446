"""Normalizers for models and date values."""

from recordserializer.serializer.normalizers.datetime_normalizer import DateTimeNormalizer
from recordserializer.serializer.normalizers.model_normalizer import ModelNormalizer

__all__ = ["DateTimeNormalizer", "ModelNormalizer"]
