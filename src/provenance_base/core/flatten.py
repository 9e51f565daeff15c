# SPDX-License-Identifier: MPL-2.0
"""Flattening of nested provenance into key-path mappings.

Nested ``StructuredData`` becomes a single mapping from key-paths (tuples of
field names) to leaf values. Nested records are replaced by their data; their
signatures and timestamps are not part of the flat view::

    flatten(record)
    # {('ct', 'field'): 1, ('ct', 'computed'): 2, ('field',): 2}

Fields are visited depth-first in insertion order. A value written to a path
that is already present replaces the earlier one, which matters when one
``out`` mapping collects several structures.

Provenance data must be acyclic: a record whose data contains itself recurses
without bound.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from .models import FlatMapping, KeyPath, ValueKind, kind_of


def flatten(value: Any, out: Optional[FlatMapping] = None, root: KeyPath = ()) -> FlatMapping:
    """Flatten a record or structured value into ``out``.

    Args:
        value: A ``ProvenanceRecord``, ``StructuredData`` (or other mapping)
            or ``None``.
        out: Mapping to write into. A new ``dict`` is used when omitted.
        root: Key-path prefix for every entry written.

    Returns:
        ``out``.
    """
    if out is None:
        out = {}

    kind = kind_of(value)
    if kind is ValueKind.ABSENT:
        return out
    if kind is ValueKind.RECORD:
        return flatten(value.data, out, root)
    if kind is ValueKind.STRUCTURED:
        for key, child in value.items():
            flatten(child, out, root + (key,))
        return out

    out[root] = value
    return out


def join_paths(flat: FlatMapping, separator: str = ".") -> Dict[str, Any]:
    """Render the key-paths of a flat mapping as ``separator``-joined strings.

    Distinct paths can join to the same string when field names contain the
    separator; the later entry wins.
    """
    return {separator.join(path): value for path, value in flat.items()}
