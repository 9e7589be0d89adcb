"""
Provider Premiumize.

La clé passe en query string: ?apikey=... ou ?access_token=... (OAuth).
Réponse /api/account/info:
    {"status": "success", "customer_id": 123, "premium_until": 1735689600}
premium_until vaut false (ou 0) pour un compte gratuit.
Le compte est premium si les jours calculés sont > 0.
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
from ..core.time_converter import from_absolute_epoch

PREMIUMIZE_ACCOUNT_URL = "https://www.premiumize.me/api/account/info"


class PremiumizeAccount(ResponseSchema):
    status: Optional[str] = None
    customer_id: Union[StrictInt, str, None] = None
    premium_until: Union[StrictBool, StrictInt, StrictFloat, str, None] = None


class PremiumizeProvider(BaseProvider):
    """Premiumize (apikey ou access_token en query string)."""

    name = "Premiumize"
    tag = "pm"

    def __init__(self, use_oauth: bool = False):
        self.use_oauth = use_oauth

    def build_request(self, credential: str) -> ProviderRequest:
        param = "access_token" if self.use_oauth else "apikey"
        return ProviderRequest(url=PREMIUMIZE_ACCOUNT_URL, params={param: credential})

    def parse_payload(self, payload: Dict[str, Any]) -> ProviderStatus:
        account = PremiumizeAccount.model_validate(payload)

        if str(account.status).lower() != "success":
            raise UpstreamShapeError(f"status={account.status!r}")

        account_id = str(account.customer_id) if account.customer_id is not None else None

        if "premium_until" not in account.model_fields_set:
            return ProviderStatus.unknown(self.name, STATUS_UNKNOWN, account_id=account_id)

        remaining = from_absolute_epoch(account.premium_until)
        return ProviderStatus.from_time(self.name, remaining, account_id=account_id)
