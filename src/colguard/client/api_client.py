"""HTTP client for the ColGuard API."""

from urllib.parse import quote
from uuid import UUID

import httpx


class ApiError(Exception):
    """Non-2xx response from the API. Not fatal; the call may be retried."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(f"{status}: {message}")
        self.status = status
        self.message = message


class ColGuardClient:
    """Thin wrapper over the /v1 endpoints.

    Pass an httpx.Client to control transport, base URL and timeouts;
    otherwise one is built from base_url and token.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        token: str | None = None,
        http: httpx.Client | None = None,
        timeout: float = 30.0,
    ) -> None:
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._http = http or httpx.Client(base_url=base_url, headers=headers, timeout=timeout)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "ColGuardClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs) -> dict | None:
        r = self._http.request(method, f"/v1{path}", **kwargs)
        if r.is_error:
            try:
                message = r.json().get("error") or r.reason_phrase
            except (ValueError, AttributeError):
                message = r.text or r.reason_phrase
            raise ApiError(r.status_code, message)
        if r.status_code == 204 or not r.content:
            return None
        return r.json()

    # Projects

    def create_project(self, name: str, description: str | None = None) -> dict:
        return self._request("POST", "/projects", json={"name": name, "description": description})

    def my_projects(self) -> list[dict]:
        return self._request("GET", "/projects/mine")["items"]

    def get_project(self, project_id: UUID | str) -> dict:
        return self._request("GET", f"/projects/{project_id}")

    # Collaborators

    def list_collaborators(self, project_id: UUID | str) -> list[dict]:
        return self._request("GET", f"/projects/{project_id}/collaborators")["items"]

    def add_collaborator(
        self, project_id: UUID | str, user_id: str, role: str = "DEVELOPER"
    ) -> dict:
        return self._request(
            "POST",
            f"/projects/{project_id}/collaborators",
            json={"user_id": user_id, "role": role},
        )

    def remove_collaborator(self, project_id: UUID | str, user_id: str) -> None:
        self._request("DELETE", f"/projects/{project_id}/collaborators/{user_id}")

    # Sheet

    def get_sheet(self, project_id: UUID | str) -> dict:
        return self._request("GET", f"/projects/{project_id}/sheet")

    def save_sheet(
        self, project_id: UUID | str, columns: list[str], rows: list[list[object]]
    ) -> dict:
        """PUT the full sheet; returns the persisted document after the server merge."""
        return self._request(
            "PUT",
            f"/projects/{project_id}/sheet",
            json={"columns": columns, "rows": rows},
        )

    def import_csv(self, project_id: UUID | str, data: bytes, filename: str = "data.csv") -> dict:
        return self._request(
            "POST",
            f"/projects/{project_id}/sheet/import",
            files={"file": (filename, data, "text/csv")},
        )

    def add_column(self, project_id: UUID | str, name: str, data_kind: str = "text") -> dict:
        return self._request(
            "POST",
            f"/projects/{project_id}/columns",
            json={"name": name, "data_kind": data_kind},
        )

    def remove_column(self, project_id: UUID | str, name: str) -> dict:
        return self._request(
            "DELETE", f"/projects/{project_id}/columns/{quote(name, safe='')}"
        )

    # Permissions

    def project_permissions(self, project_id: UUID | str) -> dict:
        return self._request("GET", f"/projects/{project_id}/permissions")

    def get_permissions(self, project_id: UUID | str, collaborator_id: str) -> dict:
        return self._request("GET", f"/projects/{project_id}/permissions/{collaborator_id}")

    def set_permissions(
        self, project_id: UUID | str, collaborator_id: str, permissions: dict[str, str]
    ) -> dict:
        """Replace explicit permissions; permissions maps column name to access level."""
        return self._request(
            "PUT",
            f"/projects/{project_id}/permissions/{collaborator_id}",
            json={
                "permissions": [
                    {"column_name": name, "access_level": level}
                    for name, level in permissions.items()
                ]
            },
        )
