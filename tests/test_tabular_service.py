import pytest
from pydantic import ValidationError

from models.tabular_models import CellKind, classify_cell
from services.errors import DecodeFailure
from services.tabular_service import build


def test_build_splits_header_and_rows():
    model = build([["Name", "Sales"], ["Alice", 10], ["Bob", "n/a"]])

    assert model.headers == ("Name", "Sales")
    assert model.rows == (("Alice", 10), ("Bob", "n/a"))


def test_build_empty_input_fails():
    with pytest.raises(DecodeFailure):
        build([])


def test_rows_match_header_width():
    model = build([["a", "b", "c"], [1], [1, 2, 3, 4], []])

    assert all(len(row) == len(model.headers) for row in model.rows)
    assert model.rows[0] == (1, None, None)
    assert model.rows[1] == (1, 2, 3)
    assert model.rows[2] == (None, None, None)


def test_headers_are_stringified_but_cells_are_not():
    model = build([[2024, None, 1.5, True], [1, "x", 2.5, False]])

    assert model.headers == ("2024", "", "1.5", "True")
    assert model.rows[0] == (1, "x", 2.5, False)


def test_header_only_sheet_has_no_rows():
    model = build([["Name", "Sales"]])

    assert model.n_cols == 2
    assert model.n_rows == 0


def test_model_is_frozen():
    model = build([["Name"], ["Alice"]])

    with pytest.raises(ValidationError):
        model.headers = ("Other",)


@pytest.mark.parametrize(
    "value, kind",
    [
        (10, CellKind.NUMBER),
        (2.5, CellKind.NUMBER),
        (True, CellKind.BOOLEAN),
        ("10", CellKind.TEXT),
        (None, CellKind.EMPTY),
        (float("nan"), CellKind.EMPTY),
    ],
)
def test_classify_cell(value, kind):
    assert classify_cell(value) == kind
