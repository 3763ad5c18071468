"""
Codec port interface definition.

This module defines the interface for turning a context record into bytes
and back. The producing side encodes; the dev-mode side decodes. Both must
be built against the same schema version.
"""

from typing import Protocol

from ..domain.models import DevModeContext


class ContextCodecPort(Protocol):
    """
    Interface for context record serialization.

    Implementations must give full-fidelity round trips: decoding the
    output of ``encode`` yields a record equal to the original, with both
    sequences in their original order.
    """

    format_name: str

    def encode(self, context: DevModeContext) -> bytes:
        """
        Serialize a context record.

        Args:
            context: The populated context record

        Returns:
            The encoded payload

        Raises:
            ContextCodecError: If the record holds values that cannot be encoded
        """
        ...

    def decode(self, data: bytes) -> DevModeContext:
        """
        Reconstruct a context record from an encoded payload.

        Args:
            data: Bytes previously produced by ``encode``

        Returns:
            A new context record equal to the one that was encoded

        Raises:
            ContextCodecError: If the payload is malformed or invalid
            SchemaVersionMismatchError: If the payload was written with a
                different schema version
        """
        ...
