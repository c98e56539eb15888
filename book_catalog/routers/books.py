"""
Books Router

CRUD endpoints over the in-memory catalog.

The catalog answers with result values (Ok / ValidationFailed / NotFound);
this module is where they become HTTP responses:

    Ok               -> 200 (201 for create) with the record in ``data``
    ValidationFailed -> 400 with every violated rule in ``errors``
    NotFound         -> 404 naming the requested id

Unexpected exceptions are not caught here; the catch-all handler in
main.py turns them into the 500 response.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, status
from fastapi.responses import JSONResponse

from book_catalog.dependencies import Catalog
from book_catalog.schemas import (
    BookListResponse,
    BookMutationResponse,
    BookResponse,
    ErrorResponse,
    ValidationErrorResponse,
)
from book_catalog.services.catalog import NotFound, ValidationFailed

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        404: {"model": ErrorResponse, "description": "Book not found"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)

BookPayload = Annotated[
    Any,
    Body(
        description="Book fields: title and author are required, year is optional",
        examples=[{"title": "Dune", "author": "Frank Herbert", "year": 1965}],
    ),
]


# =============================================================================
# Helper Functions
# =============================================================================
def failure_response(result: ValidationFailed | NotFound) -> JSONResponse:
    """Render a failed catalog result as its HTTP error response."""
    if isinstance(result, ValidationFailed):
        body = ValidationErrorResponse(errors=result.errors)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=body.model_dump(),
        )

    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"success": False, "message": result.message},
    )


# =============================================================================
# CRUD Endpoints
# =============================================================================
@router.get(
    "",
    response_model=BookListResponse,
    summary="List all books",
    description="Get every book in the catalog along with the total count.",
)
def list_books(catalog: Catalog) -> BookListResponse:
    books = catalog.list_books()
    return BookListResponse(count=len(books), data=books)


@router.get(
    "/{book_id}",
    response_model=BookResponse,
    summary="Get a book by ID",
)
def get_book(book_id: str, catalog: Catalog):
    """
    Get a single book.

    ``book_id`` is taken as a string and parsed leniently by the catalog,
    so an id that is not a number is simply not found (404) rather than
    rejected.
    """
    result = catalog.get_book(book_id)
    if isinstance(result, NotFound):
        return failure_response(result)
    return BookResponse(data=result.book)


@router.post(
    "",
    response_model=BookMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new book",
    responses={400: {"model": ValidationErrorResponse}},
)
def create_book(catalog: Catalog, payload: BookPayload = None):
    """
    Create a new book.

    The server assigns the id; title and author are trimmed before storing.

    Returns:
        201 with the created book, or 400 listing every validation error
    """
    result = catalog.create_book(payload)
    if isinstance(result, ValidationFailed):
        return failure_response(result)
    return BookMutationResponse(message="Book created successfully", data=result.book)


@router.put(
    "/{book_id}",
    response_model=BookMutationResponse,
    summary="Update a book",
    responses={400: {"model": ValidationErrorResponse}},
)
def update_book(book_id: str, catalog: Catalog, payload: BookPayload = None):
    """
    Replace a book's title, author and year.

    PUT here is a full replacement, not a merge: title and author must be
    sent every time and an omitted year is cleared.
    """
    result = catalog.update_book(book_id, payload)
    if isinstance(result, (ValidationFailed, NotFound)):
        return failure_response(result)
    return BookMutationResponse(message="Book updated successfully", data=result.book)


@router.delete(
    "/{book_id}",
    response_model=BookMutationResponse,
    summary="Delete a book",
)
def delete_book(book_id: str, catalog: Catalog):
    """Delete a book and return the removed record."""
    result = catalog.delete_book(book_id)
    if isinstance(result, NotFound):
        return failure_response(result)
    return BookMutationResponse(message="Book deleted successfully", data=result.book)
