"""
Document extraction backends.
"""
from carbon_ledger.services.extraction.base import DocumentExtractor, parse_response
from carbon_ledger.services.extraction.factory import get_extractor

__all__ = ["DocumentExtractor", "get_extractor", "parse_response"]
