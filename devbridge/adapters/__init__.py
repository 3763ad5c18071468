"""
Adapters for the devbridge system.

This module contains the concrete implementations of the port interfaces
defined in the ports module.
"""

from . import io

__all__ = ["io"]
