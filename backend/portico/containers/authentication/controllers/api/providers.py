"""Login providers the API accepts."""

from pydantic import BaseModel


class LoginProvider(BaseModel):
    name: str
    flow: str


PROVIDERS = [
    LoginProvider(name="password", flow="form"),
]


async def list_providers() -> dict:
    return {"providers": [p.model_dump() for p in PROVIDERS]}
