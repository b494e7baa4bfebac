#!/usr/bin/env python3
"""
Database Seed Script

Populates the catalog with sample books for development.

USAGE:
    # From the project root with the virtualenv active
    python scripts/seed_data.py
    python scripts/seed_data.py --clear   # wipe existing books first
    python scripts/seed_data.py --reset   # drop and recreate the tables first
"""

import argparse
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from bookshelf.database import SessionLocal, create_tables, drop_tables
from bookshelf.models import Book

SAMPLE_BOOKS = [
    {"title": "A Brief History of Time", "author": "Stephen Hawking", "genre": "Non Fiction", "year": 1988},
    {"title": "Armada", "author": "Ernest Cline", "genre": "Science Fiction", "year": 2015},
    {"title": "Emma", "author": "Jane Austen", "genre": "Classic", "year": 1815},
    {"title": "Frankenstein", "author": "Mary Shelley", "genre": "Horror", "year": 1818},
    {"title": "Harry Potter and the Philosopher's Stone", "author": "J.K. Rowling", "genre": "Fantasy", "year": 1997},
    {"title": "Pride and Prejudice", "author": "Jane Austen", "genre": "Classic", "year": 1813},
    {"title": "Ready Player One", "author": "Ernest Cline", "genre": "Science Fiction", "year": 2011},
    {"title": "The Hobbit", "author": "J.R.R. Tolkien", "genre": "Fantasy", "year": 1937},
    {"title": "The Martian", "author": "Andy Weir", "genre": "Science Fiction", "year": 2014},
    {"title": "The Universe in a Nutshell", "author": "Stephen Hawking", "genre": "Non Fiction", "year": 2001},
    {"title": "Dune", "author": "Frank Herbert", "genre": "Science Fiction", "year": 1965},
    {"title": "Untitled Manuscript", "author": "Anonymous", "genre": None, "year": None},
]


def clear_data(db: Session) -> None:
    """Delete every book."""
    print("Clearing existing books...")
    db.execute(delete(Book))
    db.commit()
    print("Books cleared.")


def create_books(db: Session) -> list[Book]:
    """Insert the sample books."""
    print("Creating books...")
    books = [Book(**data) for data in SAMPLE_BOOKS]
    db.add_all(books)
    db.commit()
    print(f"Created {len(books)} books.")
    return books


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the catalog with sample books")
    parser.add_argument("--clear", action="store_true", help="delete existing books first")
    parser.add_argument("--reset", action="store_true", help="drop and recreate the tables first")
    args = parser.parse_args()

    if args.reset:
        print("Dropping tables...")
        drop_tables()
    create_tables()

    db = SessionLocal()
    try:
        if args.clear:
            clear_data(db)
        create_books(db)
        total = db.execute(select(func.count()).select_from(Book)).scalar()
        print(f"The catalog now holds {total} books.")
    finally:
        db.close()


if __name__ == "__main__":
    main()
