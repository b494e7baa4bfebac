"""
Services Package

Logic that is kept out of the routers so it can be tested on its own:
- search.py: Free-text search filter for the book list
- forms.py: Turning validation failures into form errors
- rate_limiter.py: Rate limiting with slowapi
"""
