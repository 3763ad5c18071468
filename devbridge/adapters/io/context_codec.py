"""
Context record codecs.

This module provides the adapters implementing ``ContextCodecPort``. Each
codec wraps the record in a small versioned envelope so both ends of a
handoff can tell whether they agree on the layout:

```json
{
  "schema_version": 1,
  "context": {
    "class_path": ["file:///app/target/classes/"],
    "modules": [
      {
        "source_path": "/app/src/main/java",
        "classes_path": "/app/target/classes",
        "resource_path": "/app/src/main/resources"
      }
    ],
    "system_properties": {"debug": "5005"}
  }
}
```

## Usage Examples

```python
from devbridge.adapters.io.context_codec import get_codec

codec = get_codec("yaml")
payload = codec.encode(context)
restored = codec.decode(payload)
```
"""

import json
import logging
from abc import abstractmethod
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from ...domain.models import DevBridgeError, DevModeContext
from ...ports.codec_port import ContextCodecPort

SCHEMA_VERSION = 1

logger = logging.getLogger(__name__)


class ContextCodecError(DevBridgeError):
    """Raised when a context record cannot be encoded or decoded."""

    pass


class SchemaVersionMismatchError(ContextCodecError):
    """Raised when a payload was written with a different schema version."""

    def __init__(self, expected: int, found: Any):
        super().__init__(
            f"Unsupported context schema version {found!r} (expected {expected})"
        )
        self.expected = expected
        self.found = found


class _EnvelopeCodec(ContextCodecPort):
    """Shared envelope handling; subclasses supply the text format."""

    format_name = ""

    def __init__(
        self,
        indent: int | None = 2,
        strict_schema_version: bool = True,
        schema_version: int = SCHEMA_VERSION,
    ) -> None:
        self.indent = indent
        self.strict_schema_version = strict_schema_version
        self.schema_version = schema_version

    def encode(self, context: DevModeContext) -> bytes:
        try:
            body = context.model_dump(mode="json", warnings="error")
            payload = {"schema_version": self.schema_version, "context": body}
            data = self._dump(payload)
        except (PydanticSerializationError, TypeError, ValueError, yaml.YAMLError) as e:
            raise ContextCodecError(
                f"Failed to encode context as {self.format_name}: {e}"
            ) from e

        logger.debug(
            f"Encoded context as {self.format_name} "
            f"({len(context.class_path)} classpath entries, {len(context.modules)} modules, "
            f"{len(context.system_properties)} properties, {len(data)} bytes)"
        )
        return data

    def decode(self, data: bytes) -> DevModeContext:
        try:
            payload = self._load(data)
        except (UnicodeDecodeError, ValueError, yaml.YAMLError) as e:
            raise ContextCodecError(
                f"Malformed {self.format_name} context payload: {e}"
            ) from e

        if not isinstance(payload, dict):
            raise ContextCodecError(
                f"Context payload must be a mapping, got {type(payload).__name__}"
            )
        if "schema_version" not in payload or "context" not in payload:
            raise ContextCodecError(
                "Context payload is missing 'schema_version' or 'context'"
            )

        found = payload["schema_version"]
        if type(found) is not int or found != self.schema_version:
            if self.strict_schema_version:
                raise SchemaVersionMismatchError(self.schema_version, found)
            logger.warning(
                f"Decoding context written with schema version {found!r} "
                f"(expected {self.schema_version})"
            )

        try:
            context = DevModeContext.model_validate(payload["context"])
        except ValidationError as e:
            raise ContextCodecError(f"Invalid context payload: {e}") from e

        logger.debug(f"Decoded {self.format_name} context payload ({len(data)} bytes)")
        return context

    @abstractmethod
    def _dump(self, payload: dict[str, Any]) -> bytes:
        """Serialize the envelope to bytes."""

    @abstractmethod
    def _load(self, data: bytes) -> Any:
        """Parse bytes into plain data."""


class JsonContextCodec(_EnvelopeCodec):
    """JSON codec; the default handoff format."""

    format_name = "json"

    def _dump(self, payload: dict[str, Any]) -> bytes:
        return json.dumps(payload, indent=self.indent, ensure_ascii=False).encode(
            "utf-8"
        )

    def _load(self, data: bytes) -> Any:
        return json.loads(data.decode("utf-8"))


class YamlContextCodec(_EnvelopeCodec):
    """YAML codec, for handoff files meant to be read or edited by hand."""

    format_name = "yaml"

    def _dump(self, payload: dict[str, Any]) -> bytes:
        text = yaml.safe_dump(
            payload,
            indent=self.indent or 2,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )
        return text.encode("utf-8")

    def _load(self, data: bytes) -> Any:
        return yaml.safe_load(data.decode("utf-8"))


CODECS: dict[str, type[_EnvelopeCodec]] = {
    JsonContextCodec.format_name: JsonContextCodec,
    YamlContextCodec.format_name: YamlContextCodec,
}


def get_codec(format_name: str, **options: Any) -> ContextCodecPort:
    """Create a codec by format name ("json" or "yaml").

    Args:
        format_name: Name of the wire format
        **options: Passed to the codec constructor (indent, strict_schema_version)

    Raises:
        ContextCodecError: If the format is not supported
    """
    try:
        codec_cls = CODECS[format_name.lower()]
    except KeyError:
        raise ContextCodecError(
            f"Unsupported context format: {format_name} "
            f"(choose from {', '.join(sorted(CODECS))})"
        ) from None
    return codec_cls(**options)
