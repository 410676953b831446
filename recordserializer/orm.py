"""Bridge between SQLAlchemy mapped instances and models.

Only what the ORM has already loaded is copied: lazy relationships that
were never accessed stay absent from the model, so the serializer never
triggers queries. Collection relationships are skipped.
"""

from typing import Any, Optional

from sqlalchemy import inspect

from recordserializer.models.base import Model
from recordserializer.models.descriptor import describe


def model_from_mapped(instance: Any, model_cls: type[Model], _memo: Optional[dict[int, Model]] = None) -> Model:
    """
    Copy a SQLAlchemy mapped instance into a model.

    Args:
        instance: Mapped instance (attached or detached)
        model_cls: Model class to build; its declared relations select
                   which loaded relationships are followed

    Returns:
        Model holding the loaded column values as raw attributes
    """
    memo = {} if _memo is None else _memo
    if id(instance) in memo:
        return memo[id(instance)]

    state = inspect(instance)
    mapper = state.mapper
    unloaded = state.unloaded

    model = model_cls()
    memo[id(instance)] = model

    for column_attr in mapper.column_attrs:
        if column_attr.key in unloaded:
            continue
        model.set_raw_attribute(column_attr.key, state.dict.get(column_attr.key))

    descriptor = describe(model_cls)
    for relationship in mapper.relationships:
        relation = descriptor.relation(relationship.key)
        if relation is None or relationship.uselist or relationship.key in unloaded:
            continue
        related = state.dict.get(relationship.key)
        if related is None:
            model.set_relation(relationship.key, None)
        else:
            model.set_relation(relationship.key, model_from_mapped(related, relation.get_related(), memo))

    return model


def model_to_mapped(model: Model, mapped_cls: type, _memo: Optional[dict[int, Any]] = None) -> Any:
    """
    Build a transient SQLAlchemy instance from a model.

    Attributes matching a mapped column are passed to the constructor;
    populated scalar relations are converted recursively.

    Args:
        model: Model to convert
        mapped_cls: Declarative mapped class

    Returns:
        New, transient mapped instance
    """
    memo = {} if _memo is None else _memo
    if id(model) in memo:
        return memo[id(model)]

    mapper = inspect(mapped_cls)
    column_keys = {column_attr.key for column_attr in mapper.column_attrs}
    values = {key: value for key, value in model.get_attributes().items() if key in column_keys}

    instance = mapped_cls(**values)
    memo[id(model)] = instance

    for name, related in model.get_relations().items():
        if related is None or name not in mapper.relationships:
            continue
        relationship = mapper.relationships[name]
        if relationship.uselist:
            continue
        setattr(instance, name, model_to_mapped(related, relationship.mapper.class_, memo))

    return instance
