"""
Port interfaces for the devbridge system.

This module contains the interface definitions using Python Protocols
to define contracts between the domain and adapters.
"""

from .codec_port import ContextCodecPort

__all__ = ["ContextCodecPort"]
