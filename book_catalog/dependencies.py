"""
FastAPI Dependencies Module

The catalog is created by the application lifespan and kept on
``app.state``; handlers receive it through the ``Catalog`` alias instead
of importing a module-level global.

Usage in route:
    @router.get("/books")
    def list_books(catalog: Catalog):
        return catalog.list_books()
"""

from typing import Annotated

from fastapi import Depends, Request

from book_catalog.services.catalog import BookCatalog


def get_catalog(request: Request) -> BookCatalog:
    """Return the catalog owned by the running application."""
    return request.app.state.catalog


Catalog = Annotated[BookCatalog, Depends(get_catalog)]
