"""
Unit tests for the query engine building blocks — no database involved.
"""
import pytest

from app.errors import InvalidInputError
from app.models import Listing
from app.query import CursorWindow, OffsetWindow, SortOrder, build_filter, tokenize, trim_page
from app.query.pagination import MAX_CURSOR, MAX_OFFSET


# ---------------------------------------------------------------------------
# tokenize
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("raw", [None, "", "   ", "\t\n"])
def test_tokenize_blank_input_gives_no_terms(raw):
    assert tokenize(raw) == []


def test_tokenize_splits_on_whitespace_runs():
    assert tokenize("  laptop   used\tapple\n") == ["laptop", "used", "apple"]


def test_tokenize_keeps_term_order_and_case():
    assert tokenize("Used LAPTOP used") == ["Used", "LAPTOP", "used"]


# ---------------------------------------------------------------------------
# build_filter
# ---------------------------------------------------------------------------

def test_build_filter_without_terms_matches_all():
    assert str(build_filter([], (Listing.name, Listing.description))) == "true"


def test_build_filter_requires_columns():
    with pytest.raises(ValueError):
        build_filter(["laptop"], ())


def test_build_filter_is_and_of_ors():
    sql = str(build_filter(["laptop", "used"], (Listing.name, Listing.description)))
    assert sql.count(" AND ") == 1
    assert sql.count(" OR ") == 2
    assert "lower(listings.name)" in sql
    assert "lower(listings.description)" in sql


# ---------------------------------------------------------------------------
# SortOrder
# ---------------------------------------------------------------------------

def test_sort_recent_keyword():
    assert SortOrder.resolve("recent") is SortOrder.RECENT


@pytest.mark.parametrize("keyword", [None, "", "id", "oldest", "RECENT", "price"])
def test_sort_unknown_keywords_fall_back_to_id(keyword):
    assert SortOrder.resolve(keyword) is SortOrder.ID


def test_sort_order_by_clauses():
    recent = [str(c) for c in SortOrder.RECENT.order_by(Listing)]
    assert recent == ["listings.created_at DESC", "listings.id DESC"]
    assert [str(c) for c in SortOrder.ID.order_by(Listing)] == ["listings.id ASC"]


# ---------------------------------------------------------------------------
# OffsetWindow
# ---------------------------------------------------------------------------

def test_offset_window_defaults():
    window = OffsetWindow.from_params()
    assert (window.skip, window.take) == (0, 10)


@pytest.mark.parametrize("limit, expected", [
    ("5", 5),
    ("100", 100),
    ("101", 100),
    ("5000", 100),
    ("0", 10),
    ("-3", 10),
    ("abc", 10),
    ("", 10),
    ("7.9", 7),
])
def test_offset_window_limit_coercion(limit, expected):
    assert OffsetWindow.from_params(limit=limit).take == expected


@pytest.mark.parametrize("offset, expected", [
    ("20", 20),
    ("abc", 0),
    ("", 0),
    ("-5", 0),
    ("3.7", 3),
    (12, 12),
])
def test_offset_window_offset_coercion(offset, expected):
    assert OffsetWindow.from_params(offset=offset).skip == expected


def test_offset_window_meta():
    window = OffsetWindow.from_params("30", "15")
    assert window.meta(42) == {"offset": 30, "limit": 15, "total": 42}


# ---------------------------------------------------------------------------
# CursorWindow / trim_page
# ---------------------------------------------------------------------------

def test_cursor_window_defaults():
    window = CursorWindow.from_params()
    assert window.take == 10
    assert window.cursor is None
    assert window.fetch_size == 11


def test_cursor_window_caps_take():
    assert CursorWindow.from_params(take="500").take == 100


def test_cursor_window_parses_cursor():
    assert CursorWindow.from_params(cursor="17").cursor == 17


def test_cursor_window_empty_cursor_is_absent():
    assert CursorWindow.from_params(cursor="").cursor is None


def test_cursor_window_rejects_garbage_cursor():
    with pytest.raises(InvalidInputError):
        CursorWindow.from_params(cursor="next-please")


def test_trim_page_with_extra_row():
    items, next_cursor = trim_page([{"id": 3}, {"id": 2}, {"id": 1}], 2)
    assert items == [{"id": 3}, {"id": 2}]
    assert next_cursor == 1


def test_trim_page_last_page():
    items, next_cursor = trim_page([{"id": 1}], 2)
    assert items == [{"id": 1}]
    assert next_cursor is None


def test_trim_page_exact_fit_has_no_next_page():
    items, next_cursor = trim_page([{"id": 5}, {"id": 4}], 2)
    assert len(items) == 2
    assert next_cursor is None


def test_offset_window_clamps_huge_offset():
    window = OffsetWindow.from_params(offset="99999999999999999999")
    assert window.skip == MAX_OFFSET


@pytest.mark.parametrize("cursor, expected", [
    ("99999999999999999999", MAX_CURSOR),
    ("-99999999999999999999", 0),
    ("42", 42),
])
def test_cursor_window_clamps_to_id_range(cursor, expected):
    assert CursorWindow.from_params(cursor=cursor).cursor == expected
