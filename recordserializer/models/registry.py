"""Model class registry used to resolve relations declared by name."""

from recordserializer.exceptions import ConfigurationError

_models: dict[str, type] = {}
_ambiguous: dict[str, set[str]] = {}


def qualified_name(model_class: type) -> str:
    return f"{model_class.__module__}.{model_class.__qualname__}"


def register_model(model_class: type) -> None:
    """Register a model class under its class name and its qualified name.

    Re-registering the same qualified name replaces the earlier class. When
    two different classes share a class name, only their qualified names
    resolve.
    """
    name = model_class.__name__
    qualified = qualified_name(model_class)
    _models[qualified] = model_class

    if name in _ambiguous:
        _ambiguous[name].add(qualified)
        return

    existing = _models.get(name)
    if existing is not None and qualified_name(existing) != qualified:
        del _models[name]
        _ambiguous[name] = {qualified_name(existing), qualified}
        return
    _models[name] = model_class


def resolve_model(name: str) -> type:
    """Look up a registered model class by class name or qualified name."""
    if name in _ambiguous:
        candidates = ", ".join(sorted(_ambiguous[name]))
        raise ConfigurationError(f"Model name '{name}' is ambiguous, use one of: {candidates}")
    try:
        return _models[name]
    except KeyError:
        raise ConfigurationError(f"Unknown model '{name}'") from None
