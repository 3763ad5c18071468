"""Domain models for devbridge."""

from .models import DevBridgeError, DevModeContext, ModuleInfo

__all__ = ["DevBridgeError", "DevModeContext", "ModuleInfo"]
