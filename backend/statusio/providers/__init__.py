# Providers module
from .base_provider import (
    BaseProvider,
    PremiumState,
    ProviderStatus,
    ProviderRequest,
    MISSING_CREDENTIAL,
    BAD_RESPONSE,
    STATUS_UNKNOWN,
)
from .realdebrid_provider import RealDebridProvider
from .alldebrid_provider import AllDebridProvider
from .premiumize_provider import PremiumizeProvider
from .torbox_provider import TorBoxProvider
from .debridlink_provider import DebridLinkProvider
