"""
Provider Debrid-Link.

Endpoint et schéma d'authentification configurables par l'appelant:
- "Bearer": token dans le header Authorization
- autre valeur: clé dans la query string (?apikey=...)

Réponse:
    {"success": true, "value": {"username": "...", "premiumLeft": 86400, "accountType": 1}}
premiumLeft = secondes de premium restantes.
"""
from typing import Optional, Dict, Any, Union

from pydantic import StrictBool, StrictInt, StrictFloat

from .base_provider import (
    BaseProvider,
    ProviderRequest,
    ProviderStatus,
    ResponseSchema,
    UpstreamShapeError,
    STATUS_UNKNOWN,
)
from ..core.config import DEFAULT_DEBRID_LINK_ENDPOINT
from ..core.time_converter import from_duration

BEARER_SCHEME = "bearer"


class DebridLinkAccount(ResponseSchema):
    username: Optional[str] = None
    premiumLeft: Union[StrictInt, StrictFloat, str, None] = None
    accountType: Union[StrictInt, str, None] = None


class DebridLinkEnvelope(ResponseSchema):
    success: Union[StrictBool, StrictInt, None] = None
    value: Optional[DebridLinkAccount] = None


class DebridLinkProvider(BaseProvider):
    """Debrid-Link (Bearer ou apikey en query, endpoint surchargeable)."""

    name = "Debrid-Link"
    tag = "dl"

    def __init__(self, auth_scheme: str = "Bearer", endpoint: str = DEFAULT_DEBRID_LINK_ENDPOINT):
        self.auth_scheme = (auth_scheme or "Bearer").strip()
        self.endpoint = (endpoint or DEFAULT_DEBRID_LINK_ENDPOINT).strip()

    @property
    def uses_bearer(self) -> bool:
        return self.auth_scheme.lower() == BEARER_SCHEME

    def build_request(self, credential: str) -> ProviderRequest:
        if self.uses_bearer:
            return ProviderRequest(url=self.endpoint, headers=self._bearer_headers(credential))
        return ProviderRequest(url=self.endpoint, params={"apikey": credential})

    def parse_payload(self, payload: Dict[str, Any]) -> ProviderStatus:
        envelope = DebridLinkEnvelope.model_validate(payload)

        if not envelope.success or envelope.value is None:
            raise UpstreamShapeError(f"success={envelope.success!r}, value manquant")

        account = envelope.value

        if account.premiumLeft is None:
            return ProviderStatus.unknown(self.name, STATUS_UNKNOWN, account_id=account.username)

        remaining = from_duration(account.premiumLeft)
        if remaining.days_remaining > 0:
            return ProviderStatus.active(
                self.name,
                days_remaining=remaining.days_remaining,
                expires_at=remaining.expires_at,
                account_id=account.username,
            )

        account_type = account.accountType if account.accountType is not None else "?"
        return ProviderStatus.inactive(
            self.name,
            account_id=account.username,
            diagnostic=f"accountType={account_type}",
        )
