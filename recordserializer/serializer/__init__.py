"""Serializer, normalizers and their wiring."""

from recordserializer.config import Settings, get_settings
from recordserializer.serializer.interfaces import Normalizer
from recordserializer.serializer.normalizers import DateTimeNormalizer, ModelNormalizer
from recordserializer.serializer.serializer import Serializer


def create_serializer(settings: Settings | None = None) -> Serializer:
    """Create a serializer able to handle models and dates."""
    settings = settings or get_settings()
    return Serializer(
        [
            ModelNormalizer(max_depth=settings.max_depth),
            DateTimeNormalizer(datetime_format=settings.datetime_format),
        ]
    )


__all__ = [
    "Normalizer",
    "Serializer",
    "ModelNormalizer",
    "DateTimeNormalizer",
    "create_serializer",
]
