"""Server-side merge of a full-sheet update.

A collaborator can never change a cell of a column they cannot write, not
even by omitting it: the prior stored value always wins for such cells.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from colguard.domain.entities import Column
from colguard.domain.services.permission_resolver import Registry, resolve_access
from colguard.domain.services.row_normalizer import BLANK
from colguard.domain.value_objects import AccessLevel, SecurityRole


@dataclass
class MergeResult:
    """Columns and name-keyed rows to persist."""

    columns: list[Column]
    rows: list[dict[str, object]]
    rejected_cells: int = 0
    retained_rows: int = 0
    access: dict[str, AccessLevel] = field(default_factory=dict)


def merge_sheet(
    subject_role: SecurityRole | str,
    subject_id: str,
    proposed_columns: Sequence[Column],
    proposed_rows: Sequence[Mapping[str, object]],
    prior_columns: Sequence[Column],
    prior_rows: Sequence[Mapping[str, object]],
    registry: Registry | None,
    default: AccessLevel = AccessLevel.READ_ONLY,
) -> MergeResult:
    """Merge proposed data over prior data according to the subject's access.

    Admins replace everything verbatim, including the column list. For
    collaborators the prior column list is kept; proposed columns that do
    not exist are ignored (rejecting them is the caller's job). Rows are
    matched by position. Non-writable cells of rows beyond the prior data
    are blank. If any column is non-writable, prior rows past the end of
    the proposal are retained, since dropping them would drop protected
    cells.
    """
    if SecurityRole(subject_role) is SecurityRole.ADMIN:
        names = [c.name for c in proposed_columns]
        return MergeResult(
            columns=list(proposed_columns),
            rows=[{n: r.get(n, BLANK) for n in names} for r in proposed_rows],
            access={n: AccessLevel.READ_WRITE for n in names},
        )

    names = [c.name for c in prior_columns]
    access = resolve_access(subject_role, subject_id, registry, names, default)
    proposed_names = {c.name for c in proposed_columns}
    writable = {n for n in names if access[n].can_write and n in proposed_names}

    rejected = 0
    merged_rows: list[dict[str, object]] = []
    for i, proposed in enumerate(proposed_rows):
        prior = prior_rows[i] if i < len(prior_rows) else None
        merged: dict[str, object] = {}
        for name in names:
            if name in writable:
                merged[name] = proposed.get(name, BLANK)
                continue
            kept = prior.get(name, BLANK) if prior is not None else BLANK
            if name in proposed_names and proposed.get(name, BLANK) != kept:
                rejected += 1
            merged[name] = kept
        merged_rows.append(merged)

    retained = 0
    if len(writable) < len(names) and len(prior_rows) > len(proposed_rows):
        for prior in prior_rows[len(proposed_rows):]:
            merged_rows.append({n: prior.get(n, BLANK) for n in names})
            retained += 1

    return MergeResult(
        columns=list(prior_columns),
        rows=merged_rows,
        rejected_cells=rejected,
        retained_rows=retained,
        access=access,
    )
