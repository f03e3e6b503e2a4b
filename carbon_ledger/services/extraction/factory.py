"""
Builds the configured document extractor.
"""
import logging

from carbon_ledger.core.config import Config
from carbon_ledger.services.extraction.base import DocumentExtractor
from carbon_ledger.services.extraction.claude import DEFAULT_MODEL, ClaudeExtractor
from carbon_ledger.services.extraction.mock import MockExtractor

logger = logging.getLogger(__name__)


def get_extractor(config: Config) -> DocumentExtractor:
    """
    Mock extractor when ``[ocr] mock`` is set or no API key is configured,
    Claude otherwise.
    """
    settings = config.section("ocr")
    api_key = settings.get("api_key")

    if settings.get("mock", False) or not api_key:
        logger.info("Using mock document extractor")
        return MockExtractor()

    logger.info(f"Using Claude document extractor ({settings.get('model', DEFAULT_MODEL)})")
    return ClaudeExtractor(
        api_key=api_key,
        model=settings.get("model", DEFAULT_MODEL),
        max_tokens=settings.get("max_tokens", 1024),
    )
