"""
Domain models for the devbridge system.

This module contains the context record handed from a build-plugin
invocation to a development-mode process, along with the module
descriptors it carries. Both are Pydantic models so they can be dumped to
and validated from plain data by the codecs in ``devbridge.adapters.io``.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class DevBridgeError(Exception):
    """Base exception for devbridge errors."""

    pass


class ModuleInfo(BaseModel):
    """
    Describes the three path roles of one source module.

    Values are stored exactly as given: ``None`` and empty strings are kept
    as they are and no path normalization takes place.
    """

    model_config = ConfigDict(frozen=True)

    source_path: str | None = Field(..., description="Source directory of the module")
    classes_path: str | None = Field(
        ..., description="Compiled output directory of the module"
    )
    resource_path: str | None = Field(
        ..., description="Resource directory of the module"
    )


class DevModeContext(BaseModel):
    """
    Context data passed from the plugin doing the invocation into the dev
    mode process.

    The three collections are exposed as live containers: code holding a
    reference returned by ``class_path``, ``modules`` or
    ``system_properties`` mutates this record directly. The ``add_*`` and
    ``set_*`` helpers are thin wrappers over those same containers.

    Once handed off, the receiving side only reads the record.
    """

    class_path: list[str] = Field(
        default_factory=list, description="Ordered classpath locations"
    )
    modules: list[ModuleInfo] = Field(
        default_factory=list, description="Ordered module descriptors"
    )
    system_properties: dict[str, str] = Field(
        default_factory=dict, description="System properties for the dev process"
    )

    def add_class_path_entry(self, location: str | Path) -> None:
        """Append a classpath location.

        Strings are stored verbatim. Paths are stored as absolute ``file://``
        URIs.
        """
        if isinstance(location, Path):
            location = location.absolute().as_uri()
        self.class_path.append(location)

    def add_module(self, module: ModuleInfo) -> None:
        """Append a module descriptor."""
        self.modules.append(module)

    def set_system_property(self, key: str, value: str) -> None:
        """Insert or overwrite a system property."""
        self.system_properties[key] = value
