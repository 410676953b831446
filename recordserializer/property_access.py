"""Read and write properties on models, mappings and plain objects."""

from collections.abc import Mapping, MutableMapping
from typing import Any

from recordserializer.exceptions import NoSuchPropertyError
from recordserializer.models.base import Model


class PropertyAccessor:
    """Property access by dotted path (``author.name``).

    Models are read through ``get_attribute`` and written through
    ``set_attribute``, so mutators apply. Mappings are accessed by key,
    anything else by attribute.
    """

    SEPARATOR = "."

    def get_value(self, obj: Any, property_path: str) -> Any:
        """
        Read the value at a property path.

        Args:
            obj: Object to read from
            property_path: Property name, or dotted path through nested objects

        Returns:
            The value found at the path

        Raises:
            NoSuchPropertyError: If a non-model segment cannot be resolved
        """
        value = obj
        for segment in property_path.split(self.SEPARATOR):
            value = self._read(value, segment, property_path)
        return value

    def get_property(self, obj: Any, name: str) -> Any:
        """Read a single property; dots in ``name`` are part of the name."""
        return self._read(obj, name, name)

    def set_value(self, obj: Any, property_path: str, value: Any) -> None:
        """
        Write a value at a property path.

        Raises:
            NoSuchPropertyError: If an intermediate segment cannot be resolved
        """
        *parents, last = property_path.split(self.SEPARATOR)
        target = obj
        for segment in parents:
            target = self._read(target, segment, property_path)

        if isinstance(target, Model):
            target.set_attribute(last, value)
        elif isinstance(target, MutableMapping):
            target[last] = value
        else:
            try:
                setattr(target, last, value)
            except AttributeError as e:
                raise NoSuchPropertyError(property_path, target) from e

    def is_readable(self, obj: Any, property_path: str) -> bool:
        try:
            self.get_value(obj, property_path)
        except NoSuchPropertyError:
            return False
        return True

    def _read(self, obj: Any, name: str, property_path: str) -> Any:
        if isinstance(obj, Model):
            return obj.get_attribute(name)
        if isinstance(obj, Mapping):
            if name not in obj:
                raise NoSuchPropertyError(property_path, obj)
            return obj[name]
        try:
            return getattr(obj, name)
        except AttributeError as e:
            raise NoSuchPropertyError(property_path, obj) from e
