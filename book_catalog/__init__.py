"""
Book Catalog Service

A small REST API over an in-memory collection of books.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection functions
- schemas/: Pydantic response schemas
- routers/: API route handlers
- services/: The catalog store and its validation rules
"""

__version__ = "1.0.0"
