"""Application ports - interfaces for external adapters."""

from colguard.application.ports.access_resolver import AccessResolver
from colguard.application.ports.csv_parser import CsvParser
from colguard.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "AccessResolver",
    "CsvParser",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
