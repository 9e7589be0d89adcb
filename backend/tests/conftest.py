import json
from typing import Any, Dict, List, Optional

import pytest

from statusio.core.config import Settings


class FakeResponse:
    """Réponse aiohttp minimale (status + corps JSON)."""

    def __init__(self, status: int = 200, payload: Any = None, body: Optional[str] = None):
        self.status = status
        self._payload = payload
        self._body = body

    async def json(self, content_type=None):
        if self._body is not None:
            return json.loads(self._body)
        return self._payload


class _RequestContext:
    def __init__(self, outcome):
        self._outcome = outcome

    async def __aenter__(self):
        if isinstance(self._outcome, BaseException):
            raise self._outcome
        return self._outcome

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """
    Remplace aiohttp.ClientSession.

    routes: préfixe d'URL -> FakeResponse ou exception à lever.
    """

    def __init__(self, routes: Optional[Dict[str, Any]] = None):
        self.routes = routes or {}
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def get(self, url, headers=None, params=None):
        self.calls.append({"url": url, "headers": headers or {}, "params": params or {}})
        for prefix, outcome in self.routes.items():
            if url.startswith(prefix):
                return _RequestContext(outcome)
        return _RequestContext(FakeResponse(status=404, payload={}))

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.closed = True
        return False


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def empty_env():
    """Settings sans aucun identifiant (n'utilise ni .env ni l'environnement)."""
    return Settings(
        _env_file=None,
        RD_TOKEN="",
        AD_KEY="",
        PM_KEY="",
        PM_USE_OAUTH=False,
        TB_TOKEN="",
        DL_KEY="",
        DL_AUTH="Bearer",
        DL_ENDPOINT="https://debrid-link.com/api/account/infos",
        CACHE_MINUTES=45,
    )
