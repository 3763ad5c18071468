"""Global fixtures and utilities for the devbridge test suite."""

import pytest

from devbridge.adapters.io.logging_setup import LoggerManager
from devbridge.domain.models import DevModeContext, ModuleInfo


@pytest.fixture
def sample_modules():
    """Module descriptors covering present, empty and absent paths."""
    return [
        ModuleInfo(
            source_path="/work/app/src/main/java",
            classes_path="/work/app/target/classes",
            resource_path="/work/app/src/main/resources",
        ),
        ModuleInfo(
            source_path="",
            classes_path="/work/lib/target/classes",
            resource_path=None,
        ),
    ]


@pytest.fixture
def populated_context(sample_modules):
    """A context record with every collection populated."""
    context = DevModeContext()
    context.add_class_path_entry("file:/work/app/target/classes/")
    context.add_class_path_entry("file:/m2/io/netty/netty-common.jar")
    context.add_class_path_entry("file:/m2/io/netty/netty-common.jar")
    for module in sample_modules:
        context.add_module(module)
    context.set_system_property("debug", "5005")
    context.set_system_property("profile", "dev")
    context.set_system_property("empty", "")
    context.set_system_property("greeting", "héllo wörld")
    return context


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop the managed RichHandler between tests."""
    yield
    LoggerManager.reset()
