"""Authentication web routes."""

from fastapi.responses import HTMLResponse


def register_routes(group):
    group.get(
        "/login", "pages:login_page",
        name="auth.login_page", response_class=HTMLResponse, include_in_schema=False,
    )
