##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
Utility functions for backends in smpstore.

These utilities convert in-memory data models into flat maps of strings that
SQLite columns and Redis hash fields can hold, and back again. Conversion is
driven by the type hints of the model class, so a free-text value that looks
like a number or a date is still returned as a string.
"""

import json
import logging
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional, Type, TypeVar, get_type_hints

from smpstore.db_scripts.data_models import BaseDataModel, ParticipantMigrationModel
from smpstore.exceptions import EntityNotFoundError, ParticipantMigrationNotFoundError


T = TypeVar("T", bound=BaseDataModel)

LOG = logging.getLogger(__name__)

TRUE_STRINGS = ("true", "1", "yes")


def get_not_found_error_class(model_class: Type[T]) -> Type[EntityNotFoundError]:
    """
    Get the appropriate not found error class based on the model type.

    Args:
        model_class: A [`BaseDataModel`][db_scripts.data_models.BaseDataModel] subclass.

    Returns:
        The error class to use.
    """
    error_map = {
        ParticipantMigrationModel: ParticipantMigrationNotFoundError,
    }
    return error_map.get(model_class, EntityNotFoundError)


def serialize_value(value: Any) -> Optional[str]:
    """
    Convert a single model value into its stored string form.

    Args:
        value: The value of a model field.

    Returns:
        The string to store, or None if `value` is None.
    """
    if value is None:
        return None
    if isinstance(value, set):
        # Explicitly mark this as a set so we can properly deserialize it later
        return json.dumps({"__set__": sorted(value)})
    if isinstance(value, (list, dict, tuple)):
        return json.dumps(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def serialize_entity(entity: T) -> Dict[str, Optional[str]]:
    """
    Given a [`BaseDataModel`][db_scripts.data_models.BaseDataModel] instance,
    convert its data into a format that the database can interpret.

    Args:
        entity: A [`BaseDataModel`][db_scripts.data_models.BaseDataModel] instance.

    Returns:
        A dictionary mapping every field name to its stored string (None for unset fields).
    """
    LOG.debug(f"Serializing {type(entity).__name__}...")
    return {field.name: serialize_value(getattr(entity, field.name)) for field in entity.get_instance_fields()}


def deserialize_value(value: Any, py_type: Any, field_name: str = "") -> Any:
    """
    Convert a stored value back into the type declared on the model.

    Args:
        value: The stored value. SQLite may hand back integers for integer columns.
        py_type: The type hint of the model field.
        field_name: Name of the field, for logging.

    Returns:
        The converted value. Values that cannot be converted are returned unchanged.
    """
    if value is None:
        return None

    origin_type = getattr(py_type, "__origin__", py_type)

    try:
        if origin_type in (dict, list, set, tuple):
            if not isinstance(value, str):
                return value
            loaded = json.loads(value)
            if isinstance(loaded, dict) and "__set__" in loaded:
                return set(loaded["__set__"])
            return loaded
        if py_type is datetime:
            return value if isinstance(value, datetime) else datetime.fromisoformat(str(value))
        if py_type is date:
            return value if isinstance(value, date) else date.fromisoformat(str(value))
        if py_type is bool:
            return value if isinstance(value, bool) else str(value).strip().lower() in TRUE_STRINGS
        if py_type is int:
            return int(value)
        if py_type is float:
            return float(value)
        if py_type is str:
            return value if isinstance(value, str) else str(value)
    except (TypeError, ValueError) as exc:
        LOG.error(f"Failed to deserialize field '{field_name}' with value {value!r}: {exc}")

    return value


def deserialize_entity(data: Dict[str, Any], model_class: Type[T]) -> T:
    """
    Given data that was retrieved, convert it into a data_class instance.

    Args:
        data: The data retrieved that we need to deserialize.
        model_class: A [`BaseDataModel`][db_scripts.data_models.BaseDataModel] subclass.

    Returns:
        A [`BaseDataModel`][db_scripts.data_models.BaseDataModel] instance.
    """
    LOG.debug(f"Deserializing {model_class.__name__}...")
    type_hints = get_type_hints(model_class)
    deserialized_data = {
        key: deserialize_value(val, type_hints.get(key, str), field_name=key) for key, val in data.items()
    }
    return model_class.from_dict(deserialized_data)
