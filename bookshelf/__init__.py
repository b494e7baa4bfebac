"""
Bookshelf Application Package

A small server-rendered catalog for managing books: list with search and
pagination, create, edit and delete.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy database connection and session management
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection functions (session, pagination, forms)
- templating.py: Jinja2 template environment
- models/: SQLAlchemy ORM models
- schemas/: Pydantic form and view schemas
- routers/: Route handlers rendering HTML
- services/: Query building, form error recovery, rate limiting
- templates/, static/: Server-rendered views and assets
"""

__version__ = "0.1.0"
