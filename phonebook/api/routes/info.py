"""Info Pages — HTML banner and phonebook summary."""

from datetime import datetime

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from phonebook.api.dependencies import get_person_store
from phonebook.core.repository_protocols import PersonRepository

router = APIRouter(tags=["info"])


def format_server_time(now: datetime) -> str:
    """Render a timestamp the way a JavaScript Date prints itself, e.g.
    `Mon Oct 19 2026 10:00:00 GMT+0000 (UTC)`.
    """
    return now.strftime("%a %b %d %Y %H:%M:%S GMT%z (%Z)")


@router.get("/", response_class=HTMLResponse)
async def index():
    return "<h1>Phonebook API</h1>"


@router.get("/info", response_class=HTMLResponse)
async def info(store: PersonRepository = Depends(get_person_store)):
    """Person count and current server time."""
    count = await store.count()
    now = datetime.now().astimezone()
    return (
        f"<p>Phonebook has info for {count} people</p>\n"
        f"<p>{format_server_time(now)}</p>"
    )
