"""Default web routes — the landing page when no container claims "/"."""

from fastapi.responses import HTMLResponse

from portico.config import get_settings


async def welcome():
    name = get_settings().app_name
    return HTMLResponse(
        f"<!doctype html><html><head><title>{name}</title></head>"
        f"<body><h1>{name}</h1></body></html>",
    )


def register_routes(group):
    group.get("/", welcome, name="web.root", include_in_schema=False)
