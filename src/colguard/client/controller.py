"""Project view controller - owns the client-side state of one open project."""

import logging
from uuid import UUID

from colguard.client.api_client import ColGuardClient
from colguard.client.grid import GridView
from colguard.domain.entities import User
from colguard.domain.value_objects import AccessLevel

logger = logging.getLogger(__name__)


class ProjectViewController:
    """Holds the sheet and access map of the currently open project.

    Local edits are applied optimistically. After every save the local
    state is replaced by the document the server persisted, so values the
    server refused to merge never linger on screen. The access map is
    re-fetched after column changes and whenever another project is opened.
    """

    def __init__(self, client: ColGuardClient, user: User) -> None:
        self._client = client
        self._user = user
        self._reset(None)

    def _reset(self, project_id: UUID | str | None) -> None:
        self.project_id = project_id
        self.columns: list[str] = []
        self.rows: list[dict[str, object]] = []
        self.access: dict[str, AccessLevel] = {}
        self.updated_at: str | None = None
        self.rejected_cells = 0
        self.dirty = False
        self.grid = GridView([], {}, self._user.is_admin)

    def _load(self, document: dict) -> None:
        self.columns = [c["name"] for c in document["columns"]]
        self.rows = [dict(zip(self.columns, row, strict=False)) for row in document["rows"]]
        self.access = {
            a["column_name"]: AccessLevel(a["access_level"]) for a in document["access"]
        }
        self.updated_at = document.get("updated_at")
        self.rejected_cells = document.get("rejected_cells", 0)
        self.dirty = False
        self.grid = GridView(self.columns, self.access, self._user.is_admin)

    def _require_open(self) -> None:
        if self.project_id is None:
            raise RuntimeError("No project is open")

    def open(self, project_id: UUID | str) -> None:
        """Open a project; state of the previous one is discarded first."""
        self._reset(project_id)
        self._load(self._client.get_sheet(project_id))

    def refresh(self) -> None:
        """Re-fetch sheet and access map, dropping unsaved edits."""
        self._require_open()
        self._load(self._client.get_sheet(self.project_id))

    def edit_cell(self, row_index: int, column: str, value: object) -> bool:
        """Apply an optimistic edit. Returns False if the cell is not editable."""
        self._require_open()
        if not self.grid.can_edit(column):
            return False
        self.rows[row_index][column] = "" if value is None else value
        self.dirty = True
        return True

    def add_row(self) -> int:
        """Append an empty row; returns its index."""
        self._require_open()
        self.rows.append({c: "" for c in self.columns})
        self.dirty = True
        return len(self.rows) - 1

    def save(self) -> int:
        """Send the visible sheet and adopt the server's merged result.

        Returns how many proposed cells the server refused. On ApiError the
        local edits are kept so the save can be retried.
        """
        self._require_open()
        document = self._client.save_sheet(
            self.project_id,
            self.columns,
            [[row.get(c, "") for c in self.columns] for row in self.rows],
        )
        self._load(document)
        if self.rejected_cells:
            logger.info(
                "Server kept prior values for %d cell(s) of project %s",
                self.rejected_cells,
                self.project_id,
            )
        return self.rejected_cells

    def add_column(self, name: str, data_kind: str = "text") -> None:
        self._require_open()
        self._client.add_column(self.project_id, name, data_kind)
        self.refresh()

    def remove_column(self, name: str) -> None:
        self._require_open()
        self._client.remove_column(self.project_id, name)
        self.refresh()

    def visible_rows(self) -> list[list[object]]:
        """Rows as rendered, aligned with grid.visible_columns()."""
        return self.grid.project_rows(self.rows)
