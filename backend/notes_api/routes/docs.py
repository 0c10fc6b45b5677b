"""
Notes API — Documentation Route
=================================

What:  GET / serves the README as API documentation.
How:   Content negotiation on the Accept header: clients that accept
       text/html (browsers) get rendered HTML, everything else (curl) gets
       the raw Markdown as text/plain.
"""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from notes_api.services.docs_service import docs_service

router = APIRouter(tags=["Documentation"])


@router.get(
    "/",
    summary="API documentation",
    response_class=PlainTextResponse,
    responses={200: {"content": {"text/html": {}, "text/plain": {}}}},
)
async def api_documentation(request: Request) -> Response:
    text = await docs_service.read_markdown()
    if "text/html" in request.headers.get("accept", ""):
        return HTMLResponse(docs_service.render_page(text))
    return PlainTextResponse(text)
