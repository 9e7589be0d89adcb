"""
Provider TorBox.

L'objet utilisateur peut se trouver sous data.user, user, data ou à la racine.
Deux signaux indépendants:
1. isPremium / accountType = "premium"
2. Temps restant: premiumUntil (epoch) ou premium_left / premiumLeft /
   remainingPremiumSeconds (durée en secondes)

Particularité TorBox: une durée restante positive prouve un premium actif,
même si isPremium est false ou absent (évite les faux négatifs).
"""
from typing import Optional, Dict, Any, Union

from pydantic import StrictBool, StrictInt, StrictFloat

from .base_provider import (
    BaseProvider,
    ProviderRequest,
    ProviderStatus,
    ResponseSchema,
    STATUS_UNKNOWN,
)
from ..core.time_converter import EXPIRED, TimeRemaining, from_absolute_epoch, from_duration

TORBOX_USER_URL = "https://api.torbox.app/v1/api/user/me"

Seconds = Union[StrictInt, StrictFloat, str, None]


class TorBoxUser(ResponseSchema):
    username: Optional[str] = None
    isPremium: Optional[StrictBool] = None
    accountType: Optional[str] = None
    premiumUntil: Seconds = None
    premium_left: Seconds = None
    premiumLeft: Seconds = None
    remainingPremiumSeconds: Seconds = None
    note: Optional[str] = None

    def has_premium_signal(self) -> bool:
        return bool(
            self.isPremium is not None
            or self.accountType
            or self.premiumUntil
            or self.duration_seconds
        )

    @property
    def duration_seconds(self) -> Seconds:
        return self.premium_left or self.premiumLeft or self.remainingPremiumSeconds


def _select_user(payload: Dict[str, Any]) -> Dict[str, Any]:
    """data.user -> user -> data -> racine."""
    data = payload.get("data")
    if isinstance(data, dict) and isinstance(data.get("user"), dict):
        return data["user"]
    if isinstance(payload.get("user"), dict):
        return payload["user"]
    if isinstance(data, dict):
        return data
    return payload


class TorBoxProvider(BaseProvider):
    """TorBox (token Bearer)."""

    name = "TorBox"
    tag = "tb"

    def build_request(self, credential: str) -> ProviderRequest:
        return ProviderRequest(
            url=TORBOX_USER_URL,
            headers=self._bearer_headers(credential),
            params={"settings": "true"},
        )

    def _remaining(self, user: TorBoxUser) -> TimeRemaining:
        if user.premiumUntil:
            return from_absolute_epoch(user.premiumUntil)
        if user.duration_seconds:
            return from_duration(user.duration_seconds)
        return EXPIRED

    def parse_payload(self, payload: Dict[str, Any]) -> ProviderStatus:
        user = TorBoxUser.model_validate(_select_user(payload))

        if not user.has_premium_signal():
            return ProviderStatus.unknown(self.name, STATUS_UNKNOWN, account_id=user.username)

        remaining = self._remaining(user)
        flagged = user.isPremium is True or (user.accountType or "").strip().lower() == "premium"

        if flagged:
            # Premium sans temps restant exploitable = durée inconnue
            return ProviderStatus.active(
                self.name,
                days_remaining=remaining.days_remaining or None,
                expires_at=remaining.expires_at,
                account_id=user.username,
            )

        if remaining.days_remaining > 0:
            return ProviderStatus.active(
                self.name,
                days_remaining=remaining.days_remaining,
                expires_at=remaining.expires_at,
                account_id=user.username,
            )

        return ProviderStatus.inactive(self.name, account_id=user.username, diagnostic=user.note or None)
