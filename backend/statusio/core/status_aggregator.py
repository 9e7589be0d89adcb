"""
Status Aggregator - Collecteur de statuts premium multi-providers.

Fonctionnement:
1. Empreinte des identifiants -> clé de cache
2. Cache valide: retour immédiat
3. Sinon: tous les providers activés sont interrogés EN PARALLÈLE
   (fan-out / fan-in, on attend TOUS les résultats)
4. Résultats mis en cache pour cache_minutes

Les providers ne lèvent jamais d'exception: une panne chez l'un n'empêche
pas les autres de répondre. Seule une erreur interne (empreinte, cache,
orchestration) fait échouer le cycle, et elle est signalée explicitement.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Any, Union

import aiohttp

from .config import PROVIDER_TAGS
from .credentials import CredentialSet
from .fingerprint import build_fingerprint, redact
from .status_cache import CacheBackend, status_cache
from ..providers import (
    AllDebridProvider,
    BaseProvider,
    DebridLinkProvider,
    PremiumizeProvider,
    ProviderStatus,
    RealDebridProvider,
    TorBoxProvider,
)

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[CredentialSet], BaseProvider]

# Ordre = ordre des résultats
DEFAULT_PROVIDER_FACTORIES: Dict[str, ProviderFactory] = {
    "rd": lambda creds: RealDebridProvider(),
    "ad": lambda creds: AllDebridProvider(),
    "pm": lambda creds: PremiumizeProvider(use_oauth=creds.pm_use_oauth),
    "tb": lambda creds: TorBoxProvider(),
    "dl": lambda creds: DebridLinkProvider(auth_scheme=creds.dl_auth, endpoint=creds.dl_endpoint),
}


class AggregationError(Exception):
    """Erreur interne du cycle d'agrégation (hors providers)."""


@dataclass
class AggregationResult:
    """Résultat d'un cycle d'agrégation."""
    results: List[ProviderStatus] = field(default_factory=list)
    enabled: Dict[str, bool] = field(default_factory=dict)
    error: Optional[str] = None
    from_cache: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def has_data(self) -> bool:
        """Au moins un statut connu ou un identifiant de compte."""
        return any(r.is_known or r.account_id for r in self.results)

    @property
    def any_enabled(self) -> bool:
        return any(self.enabled.values())

    def to_dict(self) -> Dict[str, Any]:
        """Convertit en dictionnaire."""
        return {
            "results": [r.to_dict() for r in self.results],
            "enabled": dict(self.enabled),
            "has_data": self.has_data,
            "error": self.error,
            "from_cache": self.from_cache,
        }


class StatusAggregator:
    """
    Agrégateur de statuts multi-providers.

    Le cache et la session HTTP sont injectables (tests).
    """

    def __init__(
        self,
        cache: Optional[CacheBackend] = None,
        provider_factories: Optional[Dict[str, ProviderFactory]] = None,
        session_factory: Optional[Callable[[], aiohttp.ClientSession]] = None,
    ):
        self._cache = cache if cache is not None else status_cache
        self._factories = provider_factories or DEFAULT_PROVIDER_FACTORIES
        self._session_factory = session_factory or self._default_session

    @staticmethod
    def _default_session() -> aiohttp.ClientSession:
        # Timeout par défaut d'aiohttp, pas de retry
        return aiohttp.ClientSession()

    def build_providers(self, credentials: CredentialSet) -> List[BaseProvider]:
        """Providers activés (identifiant non vide), dans l'ordre du registre."""
        enabled = credentials.enabled()
        return [
            self._factories[tag](credentials)
            for tag in PROVIDER_TAGS
            if enabled[tag] and tag in self._factories
        ]

    async def _fan_out(
        self,
        providers: List[BaseProvider],
        credentials: CredentialSet,
    ) -> List[ProviderStatus]:
        """Interroge tous les providers en parallèle et attend chacun d'eux."""
        async with self._session_factory() as session:
            jobs = [
                provider.fetch_status(credentials.credential_for(provider.tag), session)
                for provider in providers
            ]
            outcomes = await asyncio.gather(*jobs, return_exceptions=True)

        results = []
        for provider, outcome in zip(providers, outcomes):
            if isinstance(outcome, Exception):
                reason = str(outcome) or type(outcome).__name__
                logger.error(f"❌ {provider.name}: échec inattendu: {reason}")
                outcome = ProviderStatus.unknown(provider.name, f"error {reason}")
            elif isinstance(outcome, BaseException):
                raise outcome
            results.append(outcome)
        return results

    async def aggregate(self, credentials: CredentialSet) -> AggregationResult:
        """
        Cycle complet (cache + fan-out).
        Lève AggregationError en cas d'erreur interne.
        """
        enabled = credentials.enabled()

        try:
            cache_key = build_fingerprint(credentials)
            cached = self._cache.get(cache_key)
        except Exception as e:
            raise AggregationError(f"cache indisponible: {e}") from e

        if cached is not None:
            logger.debug("📦 Statuts servis depuis le cache")
            return AggregationResult(results=list(cached), enabled=enabled, from_cache=True)

        providers = self.build_providers(credentials)
        if not providers:
            logger.info("ℹ️ Aucun provider configuré")
            return AggregationResult(results=[], enabled=enabled)

        logger.info(
            f"🔄 Interrogation de {len(providers)} provider(s): "
            + ", ".join(f"{p.name} ({redact(credentials.credential_for(p.tag))})" for p in providers)
        )

        try:
            results = await self._fan_out(providers, credentials)
            self._cache.set(cache_key, tuple(results), credentials.ttl_seconds)
        except Exception as e:
            raise AggregationError(str(e)) from e

        return AggregationResult(results=results, enabled=enabled)

    async def fetch_status_data(self, credentials: CredentialSet) -> AggregationResult:
        """
        Point d'entrée principal.
        Ne lève pas: une erreur interne est retournée dans result.error.
        """
        try:
            return await self.aggregate(credentials)
        except AggregationError as e:
            logger.error(f"❌ Erreur agrégation des statuts: {e}")
            return AggregationResult(results=[], enabled=credentials.enabled(), error=str(e))


# Instance globale
status_aggregator = StatusAggregator()


async def fetch_status_data(config: Union[str, Dict[str, Any], None]) -> AggregationResult:
    """Agrège les statuts à partir de la config brute de l'appelant (dict ou JSON)."""
    credentials = CredentialSet.from_config(config)
    return await status_aggregator.fetch_status_data(credentials)
