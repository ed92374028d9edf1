"""Lookups against third-party vehicle registries (traffic challans, insurance).

No registry is wired up yet: ``PlaceholderRecordsProvider`` answers with fixed
strings. A real integration subclasses ``ExternalRecordsProvider`` and is
installed through ``app.dependencies.get_external_records``.
"""
import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class ExternalRecordsProvider(ABC):
    @abstractmethod
    async def fetch_challans(self, registration_no: str) -> list:
        """Return the traffic challans issued against a registration number."""

    @abstractmethod
    async def fetch_insurance_expiry(self, registration_no: str) -> str:
        """Return the insurance expiry information for a registration number."""


class PlaceholderRecordsProvider(ExternalRecordsProvider):
    async def fetch_challans(self, registration_no: str) -> list:
        logger.info("Placeholder: searching challans for registration number %s", registration_no)
        return [f"Challan data for {registration_no} would appear here (from external API)."]

    async def fetch_insurance_expiry(self, registration_no: str) -> str:
        logger.info("Placeholder: fetching insurance expiry for registration number %s", registration_no)
        return f"Insurance expiry data for {registration_no} would appear here (from external API)."
