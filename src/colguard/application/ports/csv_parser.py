"""CSV parser port - tabular file ingestion."""

from typing import Protocol

from colguard.application.dto.sheet_dto import ParsedTable


class CsvParser(Protocol):
    """Port for turning an uploaded CSV file into columns and rows."""

    def parse(self, data: bytes) -> ParsedTable: ...
