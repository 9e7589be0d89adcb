"""
Cache des statuts agrégés.
Stockage clé/valeur en mémoire avec expiration (TTL), purge paresseuse à la lecture.
"""
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """Entrée de cache. Remplacée à chaque recalcul, jamais modifiée."""
    value: Any
    expires_at: float


class CacheBackend(Protocol):
    """Interface du cache - implémentations interchangeables."""

    def get(self, key: str) -> Optional[Any]:
        ...

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        ...


class InMemoryTTLCache:
    """
    Cache TTL en mémoire (process-wide).

    Pas de déduplication des requêtes concurrentes: deux appels simultanés
    sur la même clé absente déclenchent chacun un fetch complet.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._entries: Dict[str, CacheEntry] = {}
        self._clock = clock

    def get(self, key: str) -> Optional[Any]:
        """Retourne la valeur, ou None si absente ou expirée (l'entrée expirée est supprimée)."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        if self._clock() > entry.expires_at:
            del self._entries[key]
            logger.debug("🗑️ Entrée de cache expirée supprimée")
            return None

        return entry.value

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        """Écrase inconditionnellement l'entrée existante."""
        self._entries[key] = CacheEntry(value=value, expires_at=self._clock() + ttl_seconds)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


# Instance globale
status_cache = InMemoryTTLCache()
