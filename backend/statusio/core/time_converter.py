"""
Time Converter - Normalisation des durées d'abonnement.

Chaque backend exprime le temps premium à sa façon:
- un instant absolu (epoch en secondes ou date ISO)
- une durée restante (secondes)

Tout est ramené à un couple (jours restants, date d'expiration).
RÈGLE: arrondi TOUJOURS au jour supérieur. 1 seconde restante = 1 jour,
jamais 0 (sinon l'utilisateur croit être expiré alors qu'il ne l'est pas).
"""
import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

SECONDS_PER_DAY = 86400

# Au-delà de ce seuil, un nombre est un epoch en secondes (2001-09-09T01:46:40Z).
# En dessous, on ne le considère pas comme un instant plausible.
EPOCH_PLAUSIBILITY_THRESHOLD = 1_000_000_000


@dataclass(frozen=True)
class TimeRemaining:
    """Temps premium restant, normalisé."""
    days_remaining: int
    expires_at: Optional[datetime]


EXPIRED = TimeRemaining(days_remaining=0, expires_at=None)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ceil_days(seconds: float) -> int:
    """Nombre de jours (arrondi supérieur, minimum 0)."""
    return max(0, math.ceil(seconds / SECONDS_PER_DAY))


def to_seconds(value: Any) -> Optional[float]:
    """Convertit une valeur brute en secondes finies et positives, sinon None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        secs = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(secs) or secs <= 0:
        return None
    return secs


def from_absolute_epoch(seconds: Any, now: Optional[datetime] = None) -> TimeRemaining:
    """
    Convertit un instant epoch (secondes) en temps restant.

    Args:
        seconds: Instant d'expiration en secondes depuis l'epoch
        now: Horloge figée (tests), UTC par défaut

    Returns: TimeRemaining, (0, None) si invalide ou déjà passé
    """
    secs = to_seconds(seconds)
    if secs is None:
        return EXPIRED

    try:
        instant = datetime.fromtimestamp(secs, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return EXPIRED

    return from_datetime(instant, now=now)


def from_datetime(instant: datetime, now: Optional[datetime] = None) -> TimeRemaining:
    """Même règle que from_absolute_epoch pour une date déjà parsée (naïve = UTC)."""
    now = now or utc_now()
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)

    remaining = (instant - now).total_seconds()
    if remaining <= 0:
        return EXPIRED

    return TimeRemaining(days_remaining=ceil_days(remaining), expires_at=instant)


def from_duration(seconds: Any, now: Optional[datetime] = None) -> TimeRemaining:
    """
    Convertit une durée restante (secondes) en temps restant.

    Args:
        seconds: Durée premium restante à partir de maintenant
        now: Horloge figée (tests), UTC par défaut

    Returns: TimeRemaining, (0, None) si invalide
    """
    secs = to_seconds(seconds)
    if secs is None:
        return EXPIRED

    now = now or utc_now()
    try:
        expires_at = now + timedelta(seconds=secs)
    except OverflowError:
        return EXPIRED

    return TimeRemaining(days_remaining=ceil_days(secs), expires_at=expires_at)


def looks_like_epoch(value: Any) -> bool:
    """Vrai si la valeur est un nombre (ou chaîne numérique) assez grand pour être un epoch."""
    if value is None or isinstance(value, bool):
        return False
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return False
    return math.isfinite(number) and number > EPOCH_PLAUSIBILITY_THRESHOLD


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse une date/heure ISO-8601 ('Z' accepté). None si illisible."""
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
