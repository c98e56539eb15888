"""
API Routers Package

Router Structure:
- books.py: /books/* endpoints

Each router is imported and registered in main.py.
"""

from book_catalog.routers.books import router as books_router

__all__ = [
    "books_router",
]
