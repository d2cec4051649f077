"""Adapters driving reg.exe and net.exe."""

from .registry import RegExeRegistryGateway
from .services import NetServiceGateway

__all__ = ["NetServiceGateway", "RegExeRegistryGateway"]
