"""
Partial updates of a data entry.

An ``EntryUpdate`` holds only the fields the caller actually sent, keyed by
``EntryField``. A field mapped to ``None`` is an explicit clear; an absent
field is left alone.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional

from carbon_ledger.pydantic_models.data_entry import DataEntryUpdate
from carbon_ledger.services.exceptions import InvalidInputError
from carbon_ledger.utils.constants import VerificationStatus


class EntryField(str, Enum):
    """Data entry columns a caller may change."""

    FACILITY_ID = "facility_id"
    CATEGORY_ID = "category_id"
    ENTRY_DATE = "entry_date"
    QUANTITY = "quantity"
    UNIT = "unit"
    VENDOR_NAME = "vendor_name"
    INVOICE_NUMBER = "invoice_number"
    TOTAL_COST = "total_cost"
    NOTES = "notes"


# Changing any of these invalidates the stored CO2e
EMISSION_FIELDS = frozenset({EntryField.QUANTITY, EntryField.UNIT, EntryField.CATEGORY_ID})

# Columns that cannot be cleared
REQUIRED_FIELDS = frozenset(
    {EntryField.CATEGORY_ID, EntryField.ENTRY_DATE, EntryField.QUANTITY, EntryField.UNIT}
)


@dataclass(frozen=True)
class EntryUpdate:
    changes: Mapping[EntryField, Any] = field(default_factory=dict)
    verification_status: Optional[VerificationStatus] = None

    def __post_init__(self):
        for entry_field in REQUIRED_FIELDS:
            if entry_field in self.changes and self.changes[entry_field] is None:
                raise InvalidInputError(f"{entry_field.value} cannot be cleared")

    @classmethod
    def from_request(cls, payload: DataEntryUpdate) -> "EntryUpdate":
        """
        Build an update from the fields present in a request body.

        Args:
            payload: Parsed request body

        Returns:
            EntryUpdate with one change per field that was sent
        """
        sent = payload.model_dump(exclude_unset=True)
        status = sent.pop("verification_status", None)
        changes = {EntryField(name): value for name, value in sent.items()}
        return cls(
            changes=changes,
            verification_status=VerificationStatus(status) if status else None,
        )

    @property
    def is_empty(self) -> bool:
        return not self.changes and self.verification_status is None

    @property
    def touches_emissions(self) -> bool:
        return any(entry_field in EMISSION_FIELDS for entry_field in self.changes)

    def get(self, entry_field: EntryField, default: Any = None) -> Any:
        """Value sent for ``entry_field``, or ``default`` when it was not sent."""
        return self.changes.get(entry_field, default)

    def columns(self) -> dict[str, Any]:
        return {entry_field.value: value for entry_field, value in self.changes.items()}
