"""
Canned extraction results for development and tests.
"""

import logging
from datetime import date
from decimal import Decimal

from carbon_ledger.pydantic_models.extraction import ExtractionResult
from carbon_ledger.services.extraction.base import DocumentExtractor
from carbon_ledger.utils.constants import ConfidenceLevel

logger = logging.getLogger(__name__)

MOCK_RESULTS = {
    "electricity": {
        "vendor": "Green Energy Corp",
        "consumption": Decimal("450"),
        "unit": "kWh",
        "total_cost": Decimal("120.50"),
        "notes": "Quarterly sustainability check required.",
        "confidence": ConfidenceLevel.HIGH,
    },
    "water": {
        "vendor": "AquaServe Municipal",
        "consumption": Decimal("35.4"),
        "unit": "m³",
        "total_cost": Decimal("45.30"),
        "notes": "Normal consumption for the period.",
        "confidence": ConfidenceLevel.HIGH,
    },
    "fuel": {
        "vendor": "Shell Gas Station",
        "consumption": Decimal("85.5"),
        "unit": "liters",
        "total_cost": Decimal("95.75"),
        "notes": "Regular diesel fuel.",
        "confidence": ConfidenceLevel.MEDIUM,
    },
}


class MockExtractor(DocumentExtractor):
    """Returns fixed data per category, electricity for anything unknown."""

    async def extract(self, data: bytes, mime_type: str, category: str) -> ExtractionResult:
        canned = MOCK_RESULTS.get(category, MOCK_RESULTS["electricity"])
        logger.debug(f"Mock extraction for {category} ({len(data)} bytes, {mime_type})")
        return ExtractionResult(date=date.today(), currency="USD", **canned)
