"""
IO adapters for devbridge.

Codecs for the context record, handoff file helpers and logging setup.
"""

from .context_codec import (
    CODECS,
    SCHEMA_VERSION,
    ContextCodecError,
    JsonContextCodec,
    SchemaVersionMismatchError,
    YamlContextCodec,
    get_codec,
)
from .handoff_file import (
    ContextFileError,
    format_for_path,
    read_context_file,
    write_context_file,
)
from .logging_setup import DEVBRIDGE_THEME, LoggerManager, setup_logging

__all__ = [
    "CODECS",
    "SCHEMA_VERSION",
    "ContextCodecError",
    "SchemaVersionMismatchError",
    "JsonContextCodec",
    "YamlContextCodec",
    "get_codec",
    "ContextFileError",
    "format_for_path",
    "read_context_file",
    "write_context_file",
    "DEVBRIDGE_THEME",
    "LoggerManager",
    "setup_logging",
]
