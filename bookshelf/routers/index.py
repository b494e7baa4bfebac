"""
Index Router

The site root has no page of its own; it sends visitors to the book list.
"""

from fastapi import APIRouter, status
from fastapi.responses import RedirectResponse

router = APIRouter(tags=["Root"])


@router.get("/", summary="Redirect to the book list")
def index() -> RedirectResponse:
    return RedirectResponse(url="/books", status_code=status.HTTP_303_SEE_OTHER)
