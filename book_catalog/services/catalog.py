"""
In-Memory Book Catalog

The catalog is the only state the service has: an ordered list of
``Book`` records plus the counter that hands out ids. It lives as long as
the application instance that owns it (see ``book_catalog.main.lifespan``)
and is never persisted.

Operations return explicit result values instead of raising:

    Ok(book)                 the operation succeeded
    ValidationFailed(errors) the payload broke one or more rules
    NotFound(book_id)        no record has the requested id

Routers turn these into HTTP responses. Anything else that goes wrong
is a genuine bug and is left to propagate to the application's
catch-all exception handler.

FastAPI runs sync endpoints in a thread pool, so every read and write
goes through a single lock.
"""

import logging
import re
import threading
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from book_catalog.schemas.book import Book

logger = logging.getLogger(__name__)


# =============================================================================
# Seed Data
# =============================================================================
SEED_BOOKS: tuple[dict[str, Any], ...] = (
    {"title": "The Great Gatsby", "author": "F. Scott Fitzgerald", "year": 1925},
    {"title": "To Kill a Mockingbird", "author": "Harper Lee", "year": 1960},
    {"title": "1984", "author": "George Orwell", "year": 1949},
)

TITLE_ERROR = "Title is required and must be a non-empty string"
AUTHOR_ERROR = "Author is required and must be a non-empty string"
YEAR_ERROR = "Year must be a valid integer between 0 and current year"

# ASCII only: "١" (Arabic-Indic one) is not id 1
_LEADING_INT = re.compile(r"\s*([+-]?\d+)", re.ASCII)


# =============================================================================
# Result Kinds
# =============================================================================
@dataclass(frozen=True)
class Ok:
    """Successful operation carrying the affected record."""

    book: Book


@dataclass(frozen=True)
class ValidationFailed:
    """Rejected payload; ``errors`` lists every violated rule."""

    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class NotFound:
    """No record matched. ``book_id`` is the id exactly as requested."""

    book_id: str

    @property
    def message(self) -> str:
        return f"Book with ID {self.book_id} not found"


CatalogResult = Ok | ValidationFailed | NotFound


@dataclass(frozen=True)
class BookFields:
    """A payload that passed validation, already normalized."""

    title: str
    author: str
    year: int | None


# =============================================================================
# Helper Functions
# =============================================================================
def parse_book_id(raw: str) -> int | None:
    """
    Parse a path id the lenient way: the leading run of digits wins.

    "7" -> 7, " 7" -> 7, "7abc" -> 7, "abc" -> None.
    """
    match = _LEADING_INT.match(raw)
    if match is None:
        return None
    try:
        return int(match.group(1))
    except ValueError:
        # Past the int string conversion limit; no stored id is that large
        return None


def _is_filled_string(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _is_number(value: Any) -> bool:
    # bool is an int subclass, but JSON true/false are not years
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_book_payload(
    payload: Any,
    current_year: int | None = None,
) -> BookFields | ValidationFailed:
    """
    Check a create/update payload and normalize it.

    All rules are evaluated so the client sees every problem at once.
    A year of 0 is accepted but stored as null, matching how the API has
    always treated a zero year.

    Args:
        payload: Decoded JSON body; anything other than an object is
            treated as an empty object
        current_year: Upper bound for ``year`` (defaults to this year)

    Returns:
        BookFields on success, ValidationFailed otherwise
    """
    if not isinstance(payload, Mapping):
        payload = {}
    if current_year is None:
        current_year = date.today().year

    title = payload.get("title")
    author = payload.get("author")
    year = payload.get("year")

    errors: list[str] = []
    if not _is_filled_string(title):
        errors.append(TITLE_ERROR)
    if not _is_filled_string(author):
        errors.append(AUTHOR_ERROR)

    year_value: int | None = None
    if year is None or (_is_number(year) and year == 0):
        year_value = None
    elif (
        _is_number(year)
        and (isinstance(year, int) or year.is_integer())
        and 0 <= year <= current_year
    ):
        year_value = int(year)
    else:
        errors.append(YEAR_ERROR)

    if errors:
        return ValidationFailed(errors)

    return BookFields(title=title.strip(), author=author.strip(), year=year_value)


# =============================================================================
# Catalog Store
# =============================================================================
class BookCatalog:
    """
    Ordered, lock-protected collection of books.

    Records come back as copies so callers can serialize them after the
    lock is released without seeing a concurrent update half-applied.
    """

    def __init__(
        self,
        seed: Iterable[Mapping[str, Any]] = SEED_BOOKS,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._lock = threading.Lock()
        self._today = today
        self._books: list[Book] = []
        self._next_id = 1
        for entry in seed:
            self._books.append(Book(id=self._next_id, **entry))
            self._next_id += 1

    def __len__(self) -> int:
        with self._lock:
            return len(self._books)

    @property
    def next_id(self) -> int:
        """Id the next created book will receive."""
        with self._lock:
            return self._next_id

    def _index_of(self, book_id: int | None) -> int | None:
        if book_id is None:
            return None
        for index, book in enumerate(self._books):
            if book.id == book_id:
                return index
        return None

    def list_books(self) -> list[Book]:
        """Return every book in insertion order."""
        with self._lock:
            return [book.model_copy() for book in self._books]

    def get_book(self, raw_id: str) -> Ok | NotFound:
        with self._lock:
            index = self._index_of(parse_book_id(raw_id))
            if index is None:
                return NotFound(raw_id)
            return Ok(self._books[index].model_copy())

    def create_book(self, payload: Any) -> Ok | ValidationFailed:
        """Validate ``payload`` and append it under a fresh id."""
        fields = validate_book_payload(payload, self._today().year)
        if isinstance(fields, ValidationFailed):
            return fields

        with self._lock:
            book = Book(
                id=self._next_id,
                title=fields.title,
                author=fields.author,
                year=fields.year,
            )
            self._next_id += 1
            self._books.append(book)
            logger.debug(f"Created book {book.id}: {book.title!r}")
            return Ok(book.model_copy())

    def update_book(self, raw_id: str, payload: Any) -> CatalogResult:
        """
        Replace title, author and year of an existing book.

        This is a full replacement: title and author are always required
        and a missing year clears the stored one. The id never changes.
        """
        with self._lock:
            index = self._index_of(parse_book_id(raw_id))
            if index is None:
                return NotFound(raw_id)

            fields = validate_book_payload(payload, self._today().year)
            if isinstance(fields, ValidationFailed):
                return fields

            book = self._books[index]
            book.title = fields.title
            book.author = fields.author
            book.year = fields.year
            logger.debug(f"Updated book {book.id}")
            return Ok(book.model_copy())

    def delete_book(self, raw_id: str) -> Ok | NotFound:
        """Remove a book and hand back the removed record."""
        with self._lock:
            index = self._index_of(parse_book_id(raw_id))
            if index is None:
                return NotFound(raw_id)
            book = self._books.pop(index)
            logger.debug(f"Deleted book {book.id}")
            return Ok(book)
