from fastapi import Request


async def session_status(request: Request) -> dict:
    """Anonymous unless an upstream proxy forwarded an authenticated user."""
    user = request.headers.get("X-Forwarded-User")
    return {"authenticated": user is not None, "user": user}
