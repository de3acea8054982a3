"""Unit tests for CSV parsing and column kind inference."""

import pytest

from colguard.domain.exceptions import ValidationError
from colguard.domain.value_objects import DataKind
from colguard.infrastructure.csv_import.csv_parser import StdlibCsvParser, infer_kind


@pytest.fixture
def parser() -> StdlibCsvParser:
    return StdlibCsvParser()


def test_header_becomes_columns(parser) -> None:
    table = parser.parse(b"Nome,Salario,Admissao\nAna,5000,2024-01-02\nBia,7000,2023-05-06\n")

    assert [c.name for c in table.columns] == ["Nome", "Salario", "Admissao"]
    assert [c.data_kind for c in table.columns] == [DataKind.TEXT, DataKind.NUMERIC, DataKind.DATE]
    assert table.rows[1] == {"Nome": "Bia", "Salario": "7000", "Admissao": "2023-05-06"}


def test_semicolon_delimiter_is_detected(parser) -> None:
    table = parser.parse("Nome;Cargo\nAna;Dev\nBia;QA\n".encode())
    assert [c.name for c in table.columns] == ["Nome", "Cargo"]
    assert table.rows == [{"Nome": "Ana", "Cargo": "Dev"}, {"Nome": "Bia", "Cargo": "QA"}]


def test_bom_and_cp1252_are_decoded(parser) -> None:
    utf8 = parser.parse("\ufeffNome,Função\nAna,Gerente\nBia,Analista\n".encode())
    assert [c.name for c in utf8.columns] == ["Nome", "Função"]

    legacy = parser.parse("Nome,Função\nAna,Gerente\nBia,Analista\n".encode("cp1252"))
    assert [c.name for c in legacy.columns] == ["Nome", "Função"]


def test_blank_rows_are_skipped_and_short_rows_padded(parser) -> None:
    table = parser.parse(b"Nome,Cargo,Setor\nAna,Dev,TI\n,,\nBia,QA\n")
    assert table.skipped_rows == 1
    assert table.rows[1] == {"Nome": "Bia", "Cargo": "QA", "Setor": ""}


@pytest.mark.parametrize(
    "data",
    [b"", b"   \n", b"Nome,,Cargo\nAna,x,Dev\nBia,y,QA\n", b"Nome,Nome\nAna,Bia\nCid,Dan\n"],
)
def test_invalid_files_are_rejected(parser, data) -> None:
    with pytest.raises(ValidationError):
        parser.parse(data)


@pytest.mark.parametrize(
    "values, expected",
    [
        (["sim", "Nao", ""], DataKind.BOOLEAN),
        (["1", "2,5", "-3"], DataKind.NUMERIC),
        (["2024-01-02", ""], DataKind.DATE),
        (["Ana", "1"], DataKind.TEXT),
        (["", " "], DataKind.TEXT),
    ],
)
def test_infer_kind(values, expected) -> None:
    assert infer_kind(values) is expected
