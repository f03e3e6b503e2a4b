"""
Extraction interface and response parsing.

Extractors read a utility bill or fuel receipt and report vendor, date,
consumption, unit and cost. A response that cannot be understood still
yields a result, marked low confidence so the entry lands in review.
"""

import json
import logging
import re
from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import Any

from pydantic import ValidationError

from carbon_ledger.pydantic_models.extraction import ExtractionResult
from carbon_ledger.utils.constants import (
    DEFAULT_CATEGORY_UNITS,
    FALLBACK_UNIT,
    ConfidenceLevel,
)

logger = logging.getLogger(__name__)

NUMBER_TOKEN = re.compile(r"([-+]?\d[\d,]*(?:\.\d+)?)")

UNREADABLE_NOTE = "The document could not be processed. Please review it manually."


def default_unit(category: str) -> str:
    """Unit assumed for ``category`` when the document names none."""
    return DEFAULT_CATEGORY_UNITS.get(category, FALLBACK_UNIT)


def _strip_code_fence(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else ""
        if text.rstrip().endswith("```"):
            text = text.rstrip()[:-3]
    return text.strip()


def _number(value: Any) -> Decimal:
    """First number in ``value`` ("450 kWh", "$1,234.50"); zero when there is none."""
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return Decimal(str(value))
    match = NUMBER_TOKEN.search(str(value or ""))
    if match is None:
        return Decimal("0")
    return Decimal(match.group(1).replace(",", ""))


def unreadable_result(category: str) -> ExtractionResult:
    return ExtractionResult(
        vendor="Unknown",
        date=date.today(),
        consumption=Decimal("0"),
        unit=default_unit(category),
        total_cost=Decimal("0"),
        currency="USD",
        notes=UNREADABLE_NOTE,
        confidence=ConfidenceLevel.LOW,
    )


def parse_response(text: str, category: str) -> ExtractionResult:
    """
    Parse a JSON extraction response, tolerating a Markdown code fence.

    Missing fields fall back to defaults (vendor "Unknown", today's date,
    zero consumption and cost, the category's default unit, USD, medium
    confidence).

    Args:
        text: Raw model response
        category: Category the document was submitted under

    Returns:
        ExtractionResult; low confidence with zeroed numbers when the
        response is not usable
    """
    try:
        parsed = json.loads(_strip_code_fence(text))
        if not isinstance(parsed, dict):
            raise ValueError("extraction response is not a JSON object")

        return ExtractionResult(
            vendor=parsed.get("vendor") or "Unknown",
            date=parsed.get("date") or date.today(),
            consumption=_number(parsed.get("consumption")),
            unit=parsed.get("unit") or default_unit(category),
            total_cost=_number(parsed.get("totalCost", parsed.get("total_cost"))),
            currency=parsed.get("currency") or "USD",
            notes=parsed.get("notes"),
            confidence=parsed.get("confidence") or ConfidenceLevel.MEDIUM,
        )
    except (ValueError, ValidationError) as e:
        # json.JSONDecodeError is a ValueError
        logger.warning(f"Unusable extraction response for {category}: {e}")
        return unreadable_result(category)


class DocumentExtractor(ABC):
    @abstractmethod
    async def extract(self, data: bytes, mime_type: str, category: str) -> ExtractionResult:
        """
        Read consumption data from a document.

        Args:
            data: File contents
            mime_type: MIME type of the file
            category: Consumption category it was submitted under

        Returns:
            ExtractionResult
        """
