"""Ordered override layers for optional fields."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def is_absent(value: Any) -> bool:
    """Return True for values that do not count as data (None or an empty string)."""
    return value is None or value == ""


def merge_layers(*layers: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge layers from lowest to highest precedence.

    For every key the value from the last layer where it is present wins.
    Absent values never replace a lower layer's value, and keys that are
    absent in every layer do not appear in the result.

    Args:
        *layers: Field mappings ordered lowest precedence first. ``None``
            layers are skipped.

    Returns:
        The merged fields.
    """
    merged: dict[str, Any] = {}
    for layer in layers:
        if not layer:
            continue
        for key, value in layer.items():
            if not is_absent(value):
                merged[key] = value
    return merged
