"""Authentication API routes (v1)."""


def register_routes(group):
    group.get("/auth/providers", "providers:list_providers", name="auth.providers")
    group.get("/auth/session", "session:session_status", name="auth.session")
