from carbon_ledger.services.organizations.service import OrganizationService

__all__ = ["OrganizationService"]
