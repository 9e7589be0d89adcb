"""Script pour vérifier le statut premium des comptes configurés dans .env."""
import asyncio
import logging

from statusio.core.config import settings
from statusio.core.credentials import CredentialSet
from statusio.core.status_aggregator import status_aggregator
from statusio.core.status_bucket import classify_status, worst_bucket

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


async def main():
    credentials = CredentialSet.from_config({})
    data = await status_aggregator.fetch_status_data(credentials)

    if data.error:
        print(f"❌ Erreur: {data.error}")
        return

    if not data.any_enabled:
        print("Aucun provider configuré (RD_TOKEN, AD_KEY, PM_KEY, TB_TOKEN, DL_KEY)")
        return

    print("=== STATUT DES COMPTES ===")
    for r in data.results:
        bucket = classify_status(r)
        label = f"{bucket.label} {bucket.emoji}" if bucket else "?"
        days = r.days_remaining if r.days_remaining is not None else "—"
        expires = r.expires_at.date().isoformat() if r.expires_at else "N/A"
        print(f"{r.provider_name}: {r.premium_state.value} - {label} | jours: {days} | expire: {expires}")
        if r.diagnostic:
            print(f"   ↳ {r.diagnostic}")

    if data.has_data:
        overall = worst_bucket(data.results)
        print(f"\nGlobal: {overall.label} {overall.emoji}")


if __name__ == "__main__":
    asyncio.run(main())
