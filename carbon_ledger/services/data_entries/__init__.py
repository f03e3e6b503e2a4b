"""
Data entry capture: manual entries, document ingestion, review and edits.
"""
from carbon_ledger.services.data_entries.lifecycle import EntryLifecycle, initial_status
from carbon_ledger.services.data_entries.service import DataEntryService
from carbon_ledger.services.data_entries.updates import EntryField, EntryUpdate

__all__ = [
    "DataEntryService",
    "EntryField",
    "EntryLifecycle",
    "EntryUpdate",
    "initial_status",
]
