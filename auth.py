from datetime import datetime
from typing import Optional

import pytz
from pydantic import BaseModel, ConfigDict, Field

import config


class Session(BaseModel):
    """A signed-in user, as handed over by the auth provider."""

    model_config = ConfigDict(frozen=True)

    username: str = Field(min_length=1)
    created_at: datetime = Field(default_factory=lambda: datetime.now(pytz.utc))


def _matches(path: str, prefixes) -> bool:
    return any(path == p or path.startswith(p.rstrip("/") + "/") for p in prefixes)


def resolve_route(path: str, has_session: bool) -> Optional[str]:
    """Return the route to redirect to, or None when ``path`` may be shown."""
    if not has_session and _matches(path, config.PROTECTED_ROUTES):
        return config.LOGIN_ROUTE
    if has_session and _matches(path, config.AUTH_ROUTES):
        return config.HOME_ROUTE
    return None


def route_for(path: str, session: Optional[Session]) -> str:
    return resolve_route(path, session is not None) or path
