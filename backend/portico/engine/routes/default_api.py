"""Default API routes — answered at the API root when no container claims it."""

from portico.config import get_settings


async def api_root():
    settings = get_settings()
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "status": "ok",
    }


def register_routes(group):
    group.get("/", api_root, name="api.root")
