"""Protocols shared by the serializer and its normalizers."""

from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class Normalizer(Protocol):
    """Anything able to turn values into representations and back."""

    def normalize(self, data: Any, format: Optional[str] = None, context: Optional[dict] = None) -> Any:
        ...

    def denormalize(
        self, data: Any, type_: type, format: Optional[str] = None, context: Optional[dict] = None
    ) -> Any:
        ...


@runtime_checkable
class SupportsNormalization(Protocol):
    def supports_normalization(self, data: Any, format: Optional[str] = None) -> bool:
        ...


@runtime_checkable
class SupportsDenormalization(Protocol):
    def supports_denormalization(self, data: Any, type_: type, format: Optional[str] = None) -> bool:
        ...


class SerializerAwareMixin:
    """Holds a reference to the serializer a normalizer is composed with."""

    serializer: Optional[Normalizer] = None

    def set_serializer(self, serializer: Normalizer) -> None:
        self.serializer = serializer
