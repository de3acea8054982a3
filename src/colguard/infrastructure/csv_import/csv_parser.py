"""CSV parser - header row becomes the column list, every other row a record."""

import csv
import io
from datetime import date

from colguard.application.dto.sheet_dto import ParsedTable
from colguard.domain.entities import Column
from colguard.domain.exceptions import ValidationError
from colguard.domain.value_objects import DataKind


class StdlibCsvParser:
    """Parse CSV with the csv module; delimiter sniffed among , ; and tab."""

    def __init__(self, delimiters: str = ",;\t") -> None:
        self._delimiters = delimiters

    def parse(self, data: bytes) -> ParsedTable:
        text = _decode(data)
        if not text.strip():
            raise ValidationError("CSV file is empty")

        try:
            dialect = csv.Sniffer().sniff(text[:4096], delimiters=self._delimiters)
        except csv.Error:
            dialect = csv.excel
        reader = csv.reader(io.StringIO(text), dialect)

        header = next(reader, None)
        names = [h.strip() for h in header or []]
        if not names or any(not n for n in names):
            raise ValidationError("CSV header must name every column")
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValidationError(f"Duplicate CSV columns: {', '.join(duplicates)}")

        rows: list[dict[str, object]] = []
        skipped = 0
        for record in reader:
            if not any(cell.strip() for cell in record):
                skipped += 1
                continue
            rows.append(
                {n: record[i].strip() if i < len(record) else "" for i, n in enumerate(names)}
            )

        return ParsedTable(
            columns=[Column(name=n, data_kind=infer_kind([r[n] for r in rows])) for n in names],
            rows=rows,
            skipped_rows=skipped,
        )


def _decode(data: bytes) -> str:
    """UTF-8 (BOM tolerated), falling back to cp1252."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return data.decode("cp1252", errors="replace")


_BOOLEAN_TOKENS = {"true", "false", "yes", "no", "sim", "nao", "não"}


def infer_kind(values: list[object]) -> DataKind:
    """Narrowest kind that fits every non-blank value; TEXT when nothing does."""
    present = [str(v).strip() for v in values if str(v).strip()]
    if not present:
        return DataKind.TEXT
    if all(v.lower() in _BOOLEAN_TOKENS for v in present):
        return DataKind.BOOLEAN
    if all(_is_number(v) for v in present):
        return DataKind.NUMERIC
    if all(_is_date(v) for v in present):
        return DataKind.DATE
    return DataKind.TEXT


def _is_number(value: str) -> bool:
    try:
        float(value.replace(",", "."))
    except ValueError:
        return False
    return True


def _is_date(value: str) -> bool:
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True
