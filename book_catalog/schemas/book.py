"""
Book Pydantic Schemas

Response models for the catalog. Every body the API returns carries a
``success`` flag; the envelopes below differ only in which of ``count``,
``message`` and ``data`` accompany it.

Request bodies are deliberately not modelled here: create/update payloads
are checked by ``book_catalog.services.catalog.validate_book_payload`` so
that every violated rule is reported at once with a 400, instead of
FastAPI's first-error 422.
"""

from pydantic import BaseModel, ConfigDict, Field


class Book(BaseModel):
    """A single catalog record."""

    id: int = Field(..., gt=0, description="Server-assigned identifier")
    title: str = Field(..., min_length=1, description="Book title")
    author: str = Field(..., min_length=1, description="Book author")
    year: int | None = Field(
        default=None,
        ge=0,
        description="Publication year, null when unknown",
    )

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 3,
                "title": "1984",
                "author": "George Orwell",
                "year": 1949,
            }
        },
    )


class BookListResponse(BaseModel):
    """Envelope for ``GET /books``: the whole catalog and its size."""

    success: bool = True
    count: int = Field(..., ge=0, description="Number of books returned")
    data: list[Book]


class BookResponse(BaseModel):
    """Envelope for ``GET /books/{id}``."""

    success: bool = True
    data: Book


class BookMutationResponse(BaseModel):
    """Envelope for create, update and delete results."""

    success: bool = True
    message: str = Field(..., examples=["Book created successfully"])
    data: Book


class ErrorResponse(BaseModel):
    """Body returned with 404 and 500 responses."""

    success: bool = False
    message: str
    error: str | None = Field(
        default=None,
        description="Internal error detail (development mode only)",
    )


class ValidationErrorResponse(BaseModel):
    """Body returned with 400 responses."""

    success: bool = False
    message: str = "Validation failed"
    errors: list[str]

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": False,
                "message": "Validation failed",
                "errors": [
                    "Title is required and must be a non-empty string",
                    "Author is required and must be a non-empty string",
                ],
            }
        },
    )
