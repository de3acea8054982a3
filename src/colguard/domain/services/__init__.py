"""Pure domain services: row normalization, access resolution, safe merge."""

from colguard.domain.services.permission_resolver import find_record, resolve_access
from colguard.domain.services.row_normalizer import (
    column_name,
    normalize_row,
    normalize_rows,
    rows_to_wire,
)
from colguard.domain.services.safe_merge import MergeResult, merge_sheet

__all__ = [
    "MergeResult",
    "column_name",
    "find_record",
    "merge_sheet",
    "normalize_row",
    "normalize_rows",
    "resolve_access",
    "rows_to_wire",
]
