"""Configuration models for devbridge."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class SerializationConfig(BaseModel):
    """Configuration for how context records are encoded."""

    format: Literal["json", "yaml"] = Field(
        default="json", description="Wire format for handoff files"
    )

    indent: int | None = Field(
        default=2, ge=0, le=8, description="Indentation for encoded output (None = compact)"
    )

    strict_schema_version: bool = Field(
        default=True,
        description="Reject payloads written with a different schema version",
    )


class LoggingConfig(BaseModel):
    """Configuration for logging behavior."""

    level: str = Field(default="INFO", description="Root log level")

    rich_tracebacks: bool = Field(
        default=True, description="Render exceptions with Rich tracebacks"
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate and normalize the log level name."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level


class DevBridgeConfig(BaseModel):
    """Main configuration model for devbridge."""

    serialization: SerializationConfig = Field(
        default_factory=SerializationConfig,
        description="Context record serialization settings",
    )

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging settings"
    )
