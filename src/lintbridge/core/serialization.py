# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Helpers for converting payload models to and from JSON-compatible data."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TypeAlias

from pydantic import BaseModel

JsonScalar: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = JsonScalar | list["JsonValue"] | dict[str, "JsonValue"]


def coerce_optional_str(value: JsonValue | None) -> str | None:
    """Return ``value`` when it is a string, otherwise ``None``."""

    if isinstance(value, str):
        return value
    return None


def coerce_optional_int(value: JsonValue | None) -> int | None:
    """Return an optional integer parsed from ``value`` when feasible."""

    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def mapping_sequence(value: JsonValue | None) -> tuple[Mapping[str, JsonValue], ...]:
    """Return the mapping entries contained in ``value`` when it is a list."""

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return tuple(entry for entry in value if isinstance(entry, Mapping))
    return ()


def to_wire(model: BaseModel) -> dict[str, JsonValue]:
    """Return the request body for ``model`` using wire aliases.

    Optional fields left unset are omitted rather than sent as ``null``.

    Args:
        model: Payload model destined for the Code Insights API.

    Returns:
        dict[str, JsonValue]: JSON-compatible mapping.
    """

    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__ = [
    "JsonScalar",
    "JsonValue",
    "coerce_optional_int",
    "coerce_optional_str",
    "mapping_sequence",
    "to_wire",
]
