"""
Template Environment

A single Jinja2Templates instance shared by routers and exception handlers.
Templates live in bookshelf/templates; autoescaping is on for .html files.
"""

from pathlib import Path

from fastapi.templating import Jinja2Templates

from bookshelf.config import get_settings

PACKAGE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = PACKAGE_DIR / "templates"
STATIC_DIR = PACKAGE_DIR / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

# Available in every template, e.g. {{ app_name }} in the page header
templates.env.globals["app_name"] = get_settings().app_name
