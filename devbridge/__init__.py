"""
devbridge: hand a dev-mode context record from a build plugin to the
development-mode process.
"""

from .domain.models import DevBridgeError, DevModeContext, ModuleInfo

__version__ = "0.1.0"

__all__ = ["DevBridgeError", "DevModeContext", "ModuleInfo", "__version__"]
