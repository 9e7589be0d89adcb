"""
Provider Real-Debrid.

Réponse /rest/1.0/user:
- premium: booléen (ou type = "premium"/"free")
- expiration: epoch en secondes OU date ISO selon les comptes
"""
import logging
from typing import Optional, Dict, Any, Union

from pydantic import StrictBool, StrictInt, StrictFloat

from .base_provider import (
    BaseProvider,
    ProviderRequest,
    ProviderStatus,
    ResponseSchema,
    STATUS_UNKNOWN,
)
from ..core.time_converter import (
    TimeRemaining,
    from_absolute_epoch,
    from_datetime,
    looks_like_epoch,
    parse_timestamp,
)

logger = logging.getLogger(__name__)

REALDEBRID_USER_URL = "https://api.real-debrid.com/rest/1.0/user"

Timestamp = Union[StrictInt, StrictFloat, str, None]


class RealDebridUser(ResponseSchema):
    username: Optional[str] = None
    user: Optional[str] = None
    premium: Union[StrictBool, StrictInt, None] = None
    type: Optional[str] = None
    expiration: Timestamp = None
    premium_until: Timestamp = None
    premiumUntil: Timestamp = None


class RealDebridProvider(BaseProvider):
    """Real-Debrid (token Bearer)."""

    name = "Real-Debrid"
    tag = "rd"

    def build_request(self, credential: str) -> ProviderRequest:
        return ProviderRequest(url=REALDEBRID_USER_URL, headers=self._bearer_headers(credential))

    def _remaining(self, user: RealDebridUser) -> Optional[TimeRemaining]:
        """Temps restant; détecte epoch vs date ISO pour 'expiration'."""
        if user.expiration not in (None, ""):
            if looks_like_epoch(user.expiration):
                return from_absolute_epoch(user.expiration)
            parsed = parse_timestamp(user.expiration)
            if parsed is None:
                logger.warning(f"⚠️ {self.name}: expiration illisible ({user.expiration!r})")
                return None
            return from_datetime(parsed)

        fallback = user.premium_until or user.premiumUntil
        if fallback:
            return from_absolute_epoch(fallback)
        return None

    def parse_payload(self, payload: Dict[str, Any]) -> ProviderStatus:
        user = RealDebridUser.model_validate(payload)
        account_id = user.username or user.user
        account_type = (user.type or "").strip().lower()

        if user.premium is True or account_type == "premium":
            remaining = self._remaining(user)
            return ProviderStatus.active(
                self.name,
                days_remaining=remaining.days_remaining if remaining else None,
                expires_at=remaining.expires_at if remaining else None,
                account_id=account_id,
            )

        if user.premium is False or account_type:
            return ProviderStatus.inactive(self.name, account_id=account_id)

        return ProviderStatus.unknown(self.name, STATUS_UNKNOWN, account_id=account_id)
