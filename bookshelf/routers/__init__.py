"""
Routers Package

Route handlers grouped by area:
- index.py: / (redirects to the book list)
- books.py: /books/* pages

Each router is imported and registered in main.py.
"""

from bookshelf.routers.books import router as books_router
from bookshelf.routers.index import router as index_router

__all__ = [
    "books_router",
    "index_router",
]
