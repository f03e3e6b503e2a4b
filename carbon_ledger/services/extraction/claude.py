"""
Extraction through Claude vision.
"""

import base64
import logging
from typing import Optional

import anthropic

from carbon_ledger.pydantic_models.extraction import ExtractionResult
from carbon_ledger.services.extraction.base import DocumentExtractor, parse_response

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-3-5-sonnet-20241022"

CATEGORY_HINTS = {
    "electricity": {
        "document": "electricity bill",
        "units": "kWh (kilowatt-hours)",
        "fields": "consumption in kWh, supplier name, invoice date",
    },
    "water": {
        "document": "water bill",
        "units": "m³ (cubic meters) or liters",
        "fields": "consumption in m³ or liters, supplier name, invoice date",
    },
    "fuel": {
        "document": "fuel receipt",
        "units": "liters or gallons",
        "fields": "quantity in liters or gallons, fuel type, purchase date",
    },
}

EXTRACTION_PROMPT = """Analyze this {document} and extract the following information as JSON:

{{
  "vendor": "Supplier or company name",
  "date": "Date as YYYY-MM-DD",
  "consumption": consumption as a number,
  "unit": "{units}",
  "totalCost": total amount due (number only),
  "currency": "USD, EUR, MXN, COP, etc.",
  "notes": "Any relevant note or warning",
  "confidence": "high, medium or low (your confidence in the extraction)"
}}

IMPORTANT:
- Extract ONLY the {fields}
- "consumption" must be a number without units
- "totalCost" must be a number without currency symbols
- If any value is unclear, set confidence to "low"
- If the image is not a valid bill, set confidence to "low" and explain in notes

Reply with the JSON ONLY, no additional text."""


def build_prompt(category: str) -> str:
    hints = CATEGORY_HINTS.get(category, CATEGORY_HINTS["electricity"])
    return EXTRACTION_PROMPT.format(**hints)


class ClaudeExtractor(DocumentExtractor):
    """
    Sends the document to Claude as a base64 image block with an extraction
    prompt and parses the JSON reply.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        max_tokens: int = 1024,
        client: Optional[anthropic.AsyncAnthropic] = None,
    ):
        self.model = model
        self.max_tokens = max_tokens
        self.client = client or anthropic.AsyncAnthropic(api_key=api_key)

    async def extract(self, data: bytes, mime_type: str, category: str) -> ExtractionResult:
        message = await self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            messages=[
                {
                    "role": "user",
                    "content": [
                        {
                            "type": "image",
                            "source": {
                                "type": "base64",
                                "media_type": mime_type,
                                "data": base64.standard_b64encode(data).decode("ascii"),
                            },
                        },
                        {"type": "text", "text": build_prompt(category)},
                    ],
                }
            ],
        )

        text = ""
        if message.content and message.content[0].type == "text":
            text = message.content[0].text

        result = parse_response(text, category)
        logger.info(
            f"Extracted {result.consumption} {result.unit} from {category} document "
            f"({result.confidence.value} confidence)"
        )
        return result
