"""
Catalog Store Tests

Unit tests for the in-memory catalog and its validation rules, without
going through HTTP:
- Id parsing
- Payload validation
- CRUD results (Ok / ValidationFailed / NotFound)
- Thread safety of id assignment
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import date

import pytest

from book_catalog.services.catalog import (
    AUTHOR_ERROR,
    SEED_BOOKS,
    TITLE_ERROR,
    YEAR_ERROR,
    BookCatalog,
    BookFields,
    NotFound,
    Ok,
    ValidationFailed,
    parse_book_id,
    validate_book_payload,
)


@pytest.fixture
def store() -> BookCatalog:
    """A seeded catalog whose clock is pinned to 2020."""
    return BookCatalog(today=lambda: date(2020, 6, 1))


class TestParseBookId:
    """Tests for parse_book_id()."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("7", 7),
            ("  12", 12),
            ("42abc", 42),
            ("-3", -3),
            ("+5", 5),
            ("abc", None),
            ("", None),
            ("١", None),
            ("9" * 5000, None),
        ],
    )
    def test_parse_book_id(self, raw, expected):
        assert parse_book_id(raw) == expected


class TestValidateBookPayload:
    """Tests for validate_book_payload()."""

    def test_valid_payload_is_normalized(self):
        result = validate_book_payload(
            {"title": " Dune ", "author": "Frank Herbert ", "year": 1965},
            current_year=2020,
        )

        assert result == BookFields(title="Dune", author="Frank Herbert", year=1965)

    def test_missing_fields(self):
        result = validate_book_payload({}, current_year=2020)

        assert isinstance(result, ValidationFailed)
        assert result.errors == [TITLE_ERROR, AUTHOR_ERROR]

    def test_non_string_fields(self):
        result = validate_book_payload({"title": ["Dune"], "author": 7}, current_year=2020)

        assert result.errors == [TITLE_ERROR, AUTHOR_ERROR]

    def test_non_mapping_payload(self):
        result = validate_book_payload("Dune by Herbert", current_year=2020)

        assert result.errors == [TITLE_ERROR, AUTHOR_ERROR]

    @pytest.mark.parametrize("year", [None, 0, 0.0])
    def test_unset_years_become_null(self, year):
        result = validate_book_payload(
            {"title": "T", "author": "A", "year": year},
            current_year=2020,
        )

        assert result.year is None

    def test_integral_float_year_accepted(self):
        result = validate_book_payload(
            {"title": "T", "author": "A", "year": 1999.0},
            current_year=2020,
        )

        assert result.year == 1999
        assert isinstance(result.year, int)

    @pytest.mark.parametrize(
        "year",
        [2021, -1, 1.5, "2000", False, {}, 10**400, -(10**400), float("inf"), float("nan")],
    )
    def test_invalid_years(self, year):
        result = validate_book_payload(
            {"title": "T", "author": "A", "year": year},
            current_year=2020,
        )

        assert isinstance(result, ValidationFailed)
        assert result.errors == [YEAR_ERROR]

    def test_upper_bound_is_inclusive(self):
        result = validate_book_payload(
            {"title": "T", "author": "A", "year": 2020},
            current_year=2020,
        )

        assert result.year == 2020


class TestBookCatalog:
    """Tests for BookCatalog operations."""

    def test_seeded(self, store):
        books = store.list_books()

        assert len(books) == len(SEED_BOOKS) == 3
        assert [b.id for b in books] == [1, 2, 3]
        assert store.next_id == 4

    def test_empty_seed(self):
        store = BookCatalog(seed=())

        assert store.list_books() == []
        assert store.next_id == 1

    def test_create_uses_injected_clock(self, store):
        result = store.create_book({"title": "T", "author": "A", "year": 2021})

        assert result == ValidationFailed([YEAR_ERROR])

    def test_create_and_get(self, store):
        created = store.create_book({"title": "Dune", "author": "Herbert"})

        assert isinstance(created, Ok)
        assert created.book.id == 4
        assert store.get_book("4") == created
        assert store.next_id == 5

    def test_get_missing(self, store):
        result = store.get_book("99")

        assert isinstance(result, NotFound)
        assert result.message == "Book with ID 99 not found"

    def test_returned_books_are_copies(self, store):
        book = store.get_book("1").book
        book.title = "Changed outside"

        assert store.get_book("1").book.title == "The Great Gatsby"

    def test_update_in_place(self, store):
        result = store.update_book("2", {"title": "Mockingbird", "author": "Lee", "year": 1961})

        assert isinstance(result, Ok)
        assert result.book.id == 2
        assert [b.title for b in store.list_books()] == [
            "The Great Gatsby",
            "Mockingbird",
            "1984",
        ]

    def test_update_invalid_leaves_record(self, store):
        result = store.update_book("2", {"title": "", "author": "Lee"})

        assert result == ValidationFailed([TITLE_ERROR])
        assert store.get_book("2").book.title == "To Kill a Mockingbird"

    def test_update_missing(self, store):
        assert isinstance(store.update_book("99", {"title": "T", "author": "A"}), NotFound)

    def test_delete(self, store):
        result = store.delete_book("1")

        assert isinstance(result, Ok)
        assert result.book.title == "The Great Gatsby"
        assert isinstance(store.get_book("1"), NotFound)
        assert isinstance(store.delete_book("1"), NotFound)
        assert len(store) == 2

    def test_concurrent_creates_get_unique_ids(self, store):
        def create(i):
            return store.create_book({"title": f"T{i}", "author": "A"}).book.id

        with ThreadPoolExecutor(max_workers=8) as pool:
            ids = list(pool.map(create, range(100)))

        assert sorted(ids) == list(range(4, 104))
        assert len(store) == 103
        assert store.next_id == 104
