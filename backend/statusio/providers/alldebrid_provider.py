"""
Provider AllDebrid.

Réponse /v4/user, enveloppée:
    {"status": "success", "data": {"user": {"isPremium": true, "premiumUntil": 1735689600}}}
On ne fait confiance à aucun champ tant que status != "success" ou data.user absent.
"""
import logging
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
from ..core.time_converter import from_absolute_epoch, to_seconds

logger = logging.getLogger(__name__)

ALLDEBRID_USER_URL = "https://api.alldebrid.com/v4/user"


class AllDebridUser(ResponseSchema):
    username: Optional[str] = None
    isPremium: Optional[StrictBool] = None
    premiumUntil: Union[StrictInt, StrictFloat, str, None] = None


class AllDebridData(ResponseSchema):
    user: Optional[AllDebridUser] = None


class AllDebridError(ResponseSchema):
    code: Optional[str] = None
    message: Optional[str] = None


class AllDebridEnvelope(ResponseSchema):
    status: Optional[str] = None
    data: Optional[AllDebridData] = None
    error: Optional[AllDebridError] = None


class AllDebridProvider(BaseProvider):
    """AllDebrid (clé API en Bearer)."""

    name = "AllDebrid"
    tag = "ad"

    def build_request(self, credential: str) -> ProviderRequest:
        return ProviderRequest(url=ALLDEBRID_USER_URL, headers=self._bearer_headers(credential))

    def parse_payload(self, payload: Dict[str, Any]) -> ProviderStatus:
        envelope = AllDebridEnvelope.model_validate(payload)

        if envelope.status != "success" or envelope.data is None or envelope.data.user is None:
            if envelope.error is not None:
                logger.warning(f"⚠️ {self.name}: erreur API {envelope.error.code}")
            raise UpstreamShapeError(f"status={envelope.status!r}, data.user manquant")

        user = envelope.data.user

        if user.isPremium is None:
            return ProviderStatus.unknown(self.name, STATUS_UNKNOWN, account_id=user.username)

        if not user.isPremium:
            return ProviderStatus.inactive(self.name, account_id=user.username)

        # premiumUntil absent ou 0 = durée inconnue
        if to_seconds(user.premiumUntil) is None:
            return ProviderStatus.active(self.name, account_id=user.username)

        remaining = from_absolute_epoch(user.premiumUntil)
        return ProviderStatus.active(
            self.name,
            days_remaining=remaining.days_remaining,
            expires_at=remaining.expires_at,
            account_id=user.username,
        )
