"""
Map document interpreter.

A map document is a two-level JSON object::

    {
        "person": {"first": "firstname", "last": "lastname"},
        "card":   {"idnumber": "userID"}
    }

Top-level keys name destination groups; inside each group the keys are
destination field names and the values are the source field names looked
up in the input document.
"""

import json
from collections.abc import Mapping
from typing import Any

from jsontransform.core.exceptions import (
    DuplicateDestinationFieldException,
    MalformedMapException,
)
from jsontransform.schemas import FieldSpec, GroupSpec


def groups(map_document: Any) -> list[GroupSpec]:
    """
    Return the destination groups of ``map_document`` in document order.

    The map document is only read, never modified.

    Raises:
        MalformedMapException: If the document is not an object whose every
            member is an object of strings.
    """
    if not isinstance(map_document, Mapping):
        raise MalformedMapException(
            message="Map document must be a JSON object.",
            details={"actual_type": _json_type(map_document)},
        )

    result: list[GroupSpec] = []
    for group_name, group_spec in map_document.items():
        if not isinstance(group_spec, Mapping):
            raise MalformedMapException(
                message=f"Group '{group_name}' must be a JSON object.",
                path=str(group_name),
                details={"actual_type": _json_type(group_spec)},
            )

        field_specs = []
        for destination, source in group_spec.items():
            if not isinstance(source, str):
                raise MalformedMapException(
                    message=(
                        f"Field '{destination}' in group '{group_name}' must "
                        "name a source field as a string."
                    ),
                    path=f"{group_name}.{destination}",
                    details={"actual_type": _json_type(source)},
                )
            field_specs.append(FieldSpec(destination=str(destination), source=source))

        result.append(GroupSpec(name=str(group_name), field_specs=field_specs))

    return result


def loads_map(text: str | bytes) -> Any:
    """
    Parse map document JSON text, rejecting duplicate keys.

    ``json.loads`` keeps only the last of two equal keys; a map document
    with repeated group names or repeated destination fields is ambiguous,
    so both are rejected here instead.

    Raises:
        MalformedMapException:              Invalid JSON or repeated group name.
        DuplicateDestinationFieldException: Repeated destination field in a group.
    """
    try:
        parsed = json.loads(text, object_pairs_hook=_PairList)
    except json.JSONDecodeError as exc:
        raise MalformedMapException(
            message="Map document is not valid JSON.",
            details={"reason": exc.msg, "line": exc.lineno, "column": exc.colno},
        ) from exc
    return _map_from_pairs(parsed)


def loads_with_map(text: str | bytes, map_key: str = "map") -> Any:
    """
    Parse a JSON object that carries a map document under ``map_key``.

    Only the embedded map gets the duplicate-key checks of ``loads_map``;
    the rest of the object is decoded like ``json.loads`` would.

    Raises:
        json.JSONDecodeError:               Invalid JSON.
        MalformedMapException:              Repeated group name in the map.
        DuplicateDestinationFieldException: Repeated destination field in the map.
    """
    parsed = json.loads(text, object_pairs_hook=_PairList)
    if not isinstance(parsed, _PairList):
        return _unwrap(parsed)

    result: dict[str, Any] = {}
    for key, value in parsed:
        result[key] = _map_from_pairs(value) if key == map_key else _unwrap(value)
    return result


# ─── Internal ─────────────────────────────────────────────────────────


class _PairList(list):
    """Ordered ``(key, value)`` pairs of one JSON object, duplicates kept."""


def _map_from_pairs(parsed: Any) -> Any:
    if not isinstance(parsed, _PairList):
        # Shape errors are reported by groups(); pass non-objects through.
        return _unwrap(parsed)

    document: dict[str, Any] = {}
    for group_name, group_spec in parsed:
        if group_name in document:
            raise MalformedMapException(
                message=f"Group '{group_name}' is declared more than once.",
                path=group_name,
            )
        if isinstance(group_spec, _PairList):
            document[group_name] = _group_to_dict(group_name, group_spec)
        else:
            document[group_name] = _unwrap(group_spec)

    return document


def _group_to_dict(group_name: str, pairs: _PairList) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    for destination, source in pairs:
        if destination in fields:
            raise DuplicateDestinationFieldException(
                group=group_name, field_name=destination
            )
        fields[destination] = _unwrap(source)
    return fields


def _unwrap(value: Any) -> Any:
    """Turn nested pair lists (invalid in a map, but possible) back into dicts."""
    if isinstance(value, _PairList):
        return {k: _unwrap(v) for k, v in value}
    if isinstance(value, list):
        return [_unwrap(v) for v in value]
    return value


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, list):
        return "array"
    return type(value).__name__
