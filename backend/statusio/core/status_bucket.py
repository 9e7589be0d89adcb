"""
Classification des jours restants en niveaux de sévérité.
Consommé par la couche de rendu (hors de ce package).

Seuils:
- <= 0 jour: EXPIRED
- 1-3 jours: CRITICAL
- 4-14 jours: WARNING
- > 14 jours: OK
"""
from enum import Enum
from typing import Iterable, Optional

from ..providers.base_provider import PremiumState, ProviderStatus

# Premium actif sans date connue = considéré illimité
UNBOUNDED_DAYS = 9999

CRITICAL_MAX_DAYS = 3
WARNING_MAX_DAYS = 14


class StatusBucket(Enum):
    """Niveau de sévérité, du pire au meilleur."""
    EXPIRED = "EXPIRED"
    CRITICAL = "CRITICAL"
    WARNING = "WARNING"
    OK = "OK"

    @property
    def severity(self) -> int:
        """0 = pire."""
        return _ORDER.index(self)

    @property
    def emoji(self) -> str:
        return _EMOJIS[self]

    @property
    def label(self) -> str:
        return self.value

    def __lt__(self, other: "StatusBucket") -> bool:
        if not isinstance(other, StatusBucket):
            return NotImplemented
        return self.severity < other.severity


_ORDER = [StatusBucket.EXPIRED, StatusBucket.CRITICAL, StatusBucket.WARNING, StatusBucket.OK]

_EMOJIS = {
    StatusBucket.EXPIRED: "🔴",
    StatusBucket.CRITICAL: "🟠",
    StatusBucket.WARNING: "🟡",
    StatusBucket.OK: "🟢",
}


def classify_days(days: float) -> StatusBucket:
    """Classe un nombre de jours restants."""
    if days <= 0:
        return StatusBucket.EXPIRED
    if days <= CRITICAL_MAX_DAYS:
        return StatusBucket.CRITICAL
    if days <= WARNING_MAX_DAYS:
        return StatusBucket.WARNING
    return StatusBucket.OK


def effective_days(status: ProviderStatus) -> Optional[int]:
    """
    Jours à utiliser pour la classification.
    None pour un statut inconnu (ignoré dans les résumés).
    """
    if status.premium_state == PremiumState.UNKNOWN:
        return None
    if status.days_remaining is not None:
        return status.days_remaining
    if status.premium_state == PremiumState.ACTIVE:
        return UNBOUNDED_DAYS
    return 0


def classify_status(status: ProviderStatus) -> Optional[StatusBucket]:
    days = effective_days(status)
    if days is None:
        return None
    return classify_days(days)


def worst_bucket(results: Iterable[ProviderStatus]) -> StatusBucket:
    """Pire niveau parmi les résultats connus (OK si aucun)."""
    known = [d for d in (effective_days(r) for r in results) if d is not None]
    if not known:
        return classify_days(UNBOUNDED_DAYS)
    return classify_days(min(known))
