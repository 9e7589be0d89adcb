"""
Provider de base pour les services debrid.
Classe abstraite définissant le comportement commun de tous les providers.

CONTRAT:
- fetch_status() ne lève JAMAIS d'exception vers l'appelant
- Identifiant manquant: statut UNKNOWN, aucun appel réseau
- Erreur réseau / HTTP / réponse illisible: statut UNKNOWN + diagnostic
- Chaque provider valide sa réponse via un schéma Pydantic explicite
"""
import asyncio
import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any

import aiohttp
from pydantic import BaseModel, ConfigDict, ValidationError

from ..core.config import settings
from ..core.time_converter import TimeRemaining

logger = logging.getLogger(__name__)


# Diagnostics standards
MISSING_CREDENTIAL = "missing credential"
BAD_RESPONSE = "bad response"
STATUS_UNKNOWN = "status unknown"


class PremiumState(Enum):
    """État premium d'un compte."""
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class ProviderStatus:
    """Statut normalisé d'un compte, identique pour tous les providers."""
    provider_name: str
    premium_state: PremiumState
    days_remaining: Optional[int] = None
    expires_at: Optional[datetime] = None
    account_id: Optional[str] = None
    diagnostic: Optional[str] = None

    @classmethod
    def active(
        cls,
        provider_name: str,
        days_remaining: Optional[int] = None,
        expires_at: Optional[datetime] = None,
        account_id: Optional[str] = None,
    ) -> "ProviderStatus":
        """Premium actif. days_remaining=None = durée inconnue (illimitée)."""
        return cls(
            provider_name=provider_name,
            premium_state=PremiumState.ACTIVE,
            days_remaining=days_remaining,
            expires_at=expires_at,
            account_id=account_id,
        )

    @classmethod
    def inactive(
        cls,
        provider_name: str,
        account_id: Optional[str] = None,
        diagnostic: Optional[str] = None,
    ) -> "ProviderStatus":
        return cls(
            provider_name=provider_name,
            premium_state=PremiumState.INACTIVE,
            days_remaining=0,
            expires_at=None,
            account_id=account_id,
            diagnostic=diagnostic,
        )

    @classmethod
    def unknown(
        cls,
        provider_name: str,
        diagnostic: str,
        account_id: Optional[str] = None,
    ) -> "ProviderStatus":
        return cls(
            provider_name=provider_name,
            premium_state=PremiumState.UNKNOWN,
            account_id=account_id,
            diagnostic=diagnostic,
        )

    @classmethod
    def from_time(
        cls,
        provider_name: str,
        remaining: TimeRemaining,
        account_id: Optional[str] = None,
    ) -> "ProviderStatus":
        """Actif si des jours restent, sinon inactif."""
        if remaining.days_remaining > 0:
            return cls.active(
                provider_name,
                days_remaining=remaining.days_remaining,
                expires_at=remaining.expires_at,
                account_id=account_id,
            )
        return cls.inactive(provider_name, account_id=account_id)

    @property
    def is_known(self) -> bool:
        return self.premium_state != PremiumState.UNKNOWN

    def to_dict(self) -> Dict[str, Any]:
        """Convertit en dictionnaire."""
        return {
            "provider_name": self.provider_name,
            "premium_state": self.premium_state.value,
            "days_remaining": self.days_remaining,
            "expires_at": self.expires_at.isoformat() if self.expires_at else None,
            "account_id": self.account_id,
            "diagnostic": self.diagnostic,
        }


class ResponseSchema(BaseModel):
    """Base des schémas de réponse: champs inconnus ignorés."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class UpstreamShapeError(Exception):
    """Réponse JSON valide mais sans les champs attendus."""


@dataclass
class ProviderRequest:
    """Requête HTTP à émettre pour un provider."""
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    params: Dict[str, str] = field(default_factory=dict)


class BaseProvider(ABC):
    """
    Classe de base pour tous les providers debrid.
    Un seul appel HTTP GET par fetch_status().
    """

    name: str = ""
    tag: str = ""

    @abstractmethod
    def build_request(self, credential: str) -> ProviderRequest:
        """Construit l'URL, les headers et les paramètres de la requête."""
        pass

    @abstractmethod
    def parse_payload(self, payload: Dict[str, Any]) -> ProviderStatus:
        """
        Valide la réponse et la convertit en ProviderStatus.
        Peut lever ValidationError / UpstreamShapeError (-> 'bad response').
        """
        pass

    def _bearer_headers(self, credential: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {credential}"}

    async def fetch_status(
        self,
        credential: Optional[str],
        session: aiohttp.ClientSession,
    ) -> ProviderStatus:
        """
        Récupère le statut premium du compte.

        Args:
            credential: Token / clé API (None ou vide = provider ignoré)
            session: Session HTTP partagée du cycle d'agrégation

        Returns: ProviderStatus (jamais d'exception)
        """
        credential = (credential or "").strip()
        if not credential:
            return ProviderStatus.unknown(self.name, MISSING_CREDENTIAL)

        try:
            request = self.build_request(credential)
            headers = {"User-Agent": settings.user_agent, **request.headers}

            async with session.get(request.url, headers=headers, params=request.params or None) as response:
                if not 200 <= response.status < 300:
                    logger.warning(f"⚠️ {self.name}: HTTP {response.status}")
                    return ProviderStatus.unknown(self.name, f"HTTP {response.status}")

                try:
                    payload = await response.json(content_type=None)
                except (aiohttp.ContentTypeError, json.JSONDecodeError, UnicodeDecodeError) as e:
                    logger.warning(f"⚠️ {self.name}: réponse non JSON ({e})")
                    return ProviderStatus.unknown(self.name, BAD_RESPONSE)

        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            reason = str(e) or type(e).__name__
            logger.error(f"❌ {self.name}: erreur réseau: {reason}")
            return ProviderStatus.unknown(self.name, f"network {reason}")

        if not isinstance(payload, dict):
            logger.warning(f"⚠️ {self.name}: réponse inattendue ({type(payload).__name__})")
            return ProviderStatus.unknown(self.name, BAD_RESPONSE)

        try:
            status = self.parse_payload(payload)
        except (ValidationError, UpstreamShapeError) as e:
            logger.warning(f"⚠️ {self.name}: réponse invalide: {e}")
            return ProviderStatus.unknown(self.name, BAD_RESPONSE)
        except Exception as e:
            logger.error(f"❌ {self.name}: erreur de lecture de la réponse: {e}")
            return ProviderStatus.unknown(self.name, BAD_RESPONSE)

        icon = "✅" if status.is_known else "❓"
        days = f" ({status.days_remaining}j)" if status.days_remaining is not None else ""
        logger.info(f"{icon} {self.name}: {status.premium_state.value}{days}")
        return status
