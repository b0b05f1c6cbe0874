"""Field Projection — reshape upstream records into an allow-listed subset.

Invariants:
    - Pure: no IO, input records never mutated
    - len(output) == len(records)
    - Every output element has exactly the projection's keys, in projection order
    - Values copied verbatim; absent source path → None
"""

from collections.abc import Iterable, Mapping
from typing import Any

FieldProjection = Mapping[str, str]

_MISSING = object()


def lookup_path(record: Any, path: str) -> Any:
    """Follow a dot-separated path through nested mappings.

    Returns None when any segment is absent or lands on a non-mapping.
    """
    current = record
    for part in path.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(part, _MISSING)
        if current is _MISSING:
            return None
    return current


def project_record(record: Any, projection: FieldProjection) -> dict[str, Any]:
    return {key: lookup_path(record, path) for key, path in projection.items()}


def project_records(
    records: Iterable[Any], projection: FieldProjection,
) -> list[dict[str, Any]]:
    """Apply one projection to every record."""
    return [project_record(r, projection) for r in records]
