"""Generic serializer dispatching values to registered normalizers."""

import logging
from collections.abc import Mapping
from typing import Any, Iterable, Optional

from recordserializer.exceptions import NotNormalizableValueError
from recordserializer.serializer.interfaces import SupportsDenormalization, SupportsNormalization

logger = logging.getLogger(__name__)

SCALAR_TYPES = (str, int, float, bool)


class Serializer:
    """Walks values and hands objects to the first normalizer supporting them.

    Scalars and ``None`` pass through untouched; mappings, lists, tuples
    and sets are walked recursively. Normalizers exposing ``set_serializer``
    receive this serializer so they can recurse into nested values.
    """

    def __init__(self, normalizers: Iterable[Any] = ()):
        self.normalizers = list(normalizers)
        for normalizer in self.normalizers:
            if hasattr(normalizer, "set_serializer"):
                normalizer.set_serializer(self)

    def normalize(self, data: Any, format: Optional[str] = None, context: Optional[dict] = None) -> Any:
        """
        Normalize a value into scalars, lists and dictionaries.

        Raises:
            NotNormalizableValueError: If an object is not supported by any normalizer
        """
        if data is None or isinstance(data, SCALAR_TYPES):
            return data

        normalizer = self._get_normalizer(data, format)
        if normalizer is not None:
            return normalizer.normalize(data, format, context)

        if isinstance(data, Mapping):
            return {key: self.normalize(value, format, context) for key, value in data.items()}
        if isinstance(data, (list, tuple, set, frozenset)):
            return [self.normalize(item, format, context) for item in data]

        raise NotNormalizableValueError(
            f"Could not normalize object of type {type(data).__name__}, no supporting normalizer found."
        )

    def denormalize(
        self, data: Any, type_: type, format: Optional[str] = None, context: Optional[dict] = None
    ) -> Any:
        """
        Denormalize a representation into an instance of ``type_``.

        Raises:
            NotNormalizableValueError: If no normalizer supports ``type_``
        """
        if data is None:
            return None

        normalizer = self._get_denormalizer(data, type_, format)
        if normalizer is not None:
            return normalizer.denormalize(data, type_, format, context)

        if isinstance(type_, type) and isinstance(data, type_):
            return data

        raise NotNormalizableValueError(
            f"Could not denormalize object of type {getattr(type_, '__name__', type_)}, "
            "no supporting normalizer found."
        )

    def supports_normalization(self, data: Any, format: Optional[str] = None) -> bool:
        return self._get_normalizer(data, format) is not None

    def supports_denormalization(self, data: Any, type_: type, format: Optional[str] = None) -> bool:
        return self._get_denormalizer(data, type_, format) is not None

    def _get_normalizer(self, data: Any, format: Optional[str]) -> Any:
        for normalizer in self.normalizers:
            if isinstance(normalizer, SupportsNormalization) and normalizer.supports_normalization(data, format):
                return normalizer
        return None

    def _get_denormalizer(self, data: Any, type_: type, format: Optional[str]) -> Any:
        for normalizer in self.normalizers:
            if isinstance(normalizer, SupportsDenormalization) and normalizer.supports_denormalization(
                data, type_, format
            ):
                return normalizer
        logger.debug(f"No denormalizer found for {type_!r}")
        return None
