"""
Application constants.
"""
from enum import Enum


class ConfigFile:
    """Configuration file names."""
    PRODUCTION = "production.toml"
    DEVELOPMENT = "development.toml"
    TEST = "test.toml"


class VerificationStatus(str, Enum):
    """Review state of a data entry."""
    PENDING = "pending"
    VERIFIED = "verified"
    ACTION_REQUIRED = "action_required"


class ConfidenceLevel(str, Enum):
    """Self-reported reliability of a document extraction."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class UserRole(str, Enum):
    """Role of a user inside their organization."""
    ADMIN = "admin"
    MANAGER = "manager"
    USER = "user"
    VIEWER = "viewer"


# Roles allowed to create, change or remove facilities
FACILITY_MANAGER_ROLES = frozenset({UserRole.ADMIN.value, UserRole.MANAGER.value})


class FacilityType(str, Enum):
    """Kinds of facility an organization can register."""
    OFFICE = "office"
    WAREHOUSE = "warehouse"
    FACTORY = "factory"
    RETAIL = "retail"
    DATA_CENTER = "data_center"
    OTHER = "other"


class DocumentCategory(str, Enum):
    """Consumption categories accepted for document ingestion."""
    ELECTRICITY = "electricity"
    WATER = "water"
    FUEL = "fuel"
    NATURAL_GAS = "natural_gas"
    DIESEL = "diesel"


class Scope:
    """GHG Protocol Scope constants."""
    SCOPE_1 = 1
    SCOPE_2 = 2
    SCOPE_3 = 3


class Currency(str, Enum):
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    MXN = "MXN"
    COP = "COP"
    BRL = "BRL"


class DistanceUnit(str, Enum):
    KM = "km"
    MILES = "miles"


class VolumeUnit(str, Enum):
    LITERS = "liters"
    GALLONS = "gallons"


# Default unit reported for each document category when extraction gives none
DEFAULT_CATEGORY_UNITS = {
    DocumentCategory.ELECTRICITY.value: "kWh",
    DocumentCategory.WATER.value: "m³",
    DocumentCategory.FUEL.value: "liters",
}
FALLBACK_UNIT = "units"

# Document upload limits
ALLOWED_DOCUMENT_MIME_TYPES = frozenset(
    {"application/pdf", "image/jpeg", "image/jpg", "image/png"}
)
MAX_DOCUMENT_SIZE_BYTES = 25 * 1024 * 1024

# Storage folder documents are scoped under
ORGANIZATIONS_FOLDER = "organizations"

INVITE_CODE_EXPIRY = "7 days"
