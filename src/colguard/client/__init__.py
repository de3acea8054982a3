"""Client-side render/edit surface for project sheets."""

from colguard.client.api_client import ApiError, ColGuardClient
from colguard.client.controller import ProjectViewController
from colguard.client.grid import CellState, GridView

__all__ = [
    "ApiError",
    "CellState",
    "ColGuardClient",
    "GridView",
    "ProjectViewController",
]
