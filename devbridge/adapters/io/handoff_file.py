"""
Handoff file helpers.

Read and write an encoded context record on disk. Writes are atomic: the
payload goes to a temporary file in the destination directory and is then
renamed over the target, so a reader never sees a half-written record.
"""

import logging
import os
import tempfile
from pathlib import Path

from ...domain.models import DevBridgeError, DevModeContext
from ...ports.codec_port import ContextCodecPort
from .context_codec import JsonContextCodec, YamlContextCodec

logger = logging.getLogger(__name__)

SUFFIX_FORMATS = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
}


class ContextFileError(DevBridgeError):
    """Raised when a handoff file cannot be read or written."""

    pass


def format_for_path(path: str | Path) -> str:
    """Infer the wire format from a file suffix, defaulting to JSON."""
    return SUFFIX_FORMATS.get(Path(path).suffix.lower(), "json")


def _codec_for_path(path: Path) -> ContextCodecPort:
    if format_for_path(path) == "yaml":
        return YamlContextCodec()
    return JsonContextCodec()


def write_context_file(
    context: DevModeContext,
    path: str | Path,
    codec: ContextCodecPort | None = None,
) -> Path:
    """
    Encode a context record and write it atomically.

    Args:
        context: The populated context record
        path: Destination file; parent directories are created as needed
        codec: Codec to use; inferred from the file suffix when omitted

    Returns:
        The path that was written

    Raises:
        ContextCodecError: If the record cannot be encoded
        ContextFileError: If the file cannot be written
    """
    path = Path(path)
    codec = codec or _codec_for_path(path)
    data = codec.encode(context)

    temp_path: Path | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="wb",
            suffix=path.suffix,
            dir=path.parent,
            delete=False,
        ) as temp_file:
            temp_path = Path(temp_file.name)
            temp_file.write(data)
            temp_file.flush()
            os.fsync(temp_file.fileno())

        # Atomic rename
        temp_path.replace(path)
    except OSError as e:
        logger.error(f"Failed to write context file {path}: {e}")
        raise ContextFileError(f"Failed to write context file {path}: {e}") from e
    finally:
        if temp_path is not None and temp_path.exists():
            try:
                temp_path.unlink()
            except OSError:
                pass

    logger.debug(f"Wrote {codec.format_name} context file {path} ({len(data)} bytes)")
    return path


def read_context_file(
    path: str | Path, codec: ContextCodecPort | None = None
) -> DevModeContext:
    """
    Read and decode a context record from disk.

    Args:
        path: Handoff file to read
        codec: Codec to use; inferred from the file suffix when omitted

    Raises:
        ContextCodecError: If the payload cannot be decoded
        ContextFileError: If the file cannot be read
    """
    path = Path(path)
    codec = codec or _codec_for_path(path)

    try:
        data = path.read_bytes()
    except OSError as e:
        raise ContextFileError(f"Failed to read context file {path}: {e}") from e

    logger.debug(f"Read {len(data)} bytes from {path}")
    return codec.decode(data)
