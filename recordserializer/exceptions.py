"""Custom exceptions for model serialization."""


class SerializerError(Exception):
    """Base exception for serializer errors."""

    pass


class ConfigurationError(SerializerError):
    """Raised when the serializer stack is wired together incorrectly."""

    pass


class ConstructionError(SerializerError):
    """Raised when a model class cannot be default-constructed."""

    def __init__(self, model_class: type, original_error: Exception | None = None):
        message = f"Could not instantiate model '{model_class.__name__}'"
        if original_error is not None:
            message = f"{message}: {original_error}"
        super().__init__(message)
        self.model_class = model_class
        self.original_error = original_error


class NotNormalizableValueError(SerializerError):
    """Raised when no normalizer supports the given value or type."""

    pass


class UnexpectedValueError(SerializerError):
    """Raised when a raw value cannot be coerced into the requested type."""

    def __init__(self, message: str, value: object = None):
        super().__init__(message)
        self.value = value


class CircularReferenceError(SerializerError):
    """Raised when a model is reached again while it is being normalized."""

    def __init__(self, model: object):
        message = f"A circular reference has been detected for {model!r}"
        super().__init__(message)
        self.model = model


class MaxDepthExceededError(SerializerError):
    """Raised when relation nesting goes beyond the configured depth."""

    def __init__(self, max_depth: int, path: str = ""):
        message = f"Maximum relation depth of {max_depth} exceeded"
        if path:
            message = f"{message} at '{path}'"
        super().__init__(message)
        self.max_depth = max_depth
        self.path = path


class NoSuchPropertyError(SerializerError):
    """Raised when a property path cannot be read or written."""

    def __init__(self, property_path: str, obj: object = None):
        message = f"Property '{property_path}' does not exist on {type(obj).__name__}"
        super().__init__(message)
        self.property_path = property_path
        self.obj = obj
