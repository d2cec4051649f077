"""Application services."""

from .restore_service import RestoreConfigService, RestoreServiceRequest

__all__ = ["RestoreConfigService", "RestoreServiceRequest"]
