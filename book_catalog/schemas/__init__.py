"""
Pydantic Schemas Package

Response models shared by the routers and the OpenAPI documentation.
"""

from book_catalog.schemas.book import (
    Book,
    BookListResponse,
    BookMutationResponse,
    BookResponse,
    ErrorResponse,
    ValidationErrorResponse,
)

__all__ = [
    "Book",
    "BookListResponse",
    "BookResponse",
    "BookMutationResponse",
    "ErrorResponse",
    "ValidationErrorResponse",
]
