import json

import pytest
import yaml
from click.testing import CliRunner

from devbridge.adapters.io.context_codec import SCHEMA_VERSION
from devbridge.adapters.io.handoff_file import read_context_file, write_context_file
from devbridge.cli.main import app
from devbridge.domain.models import DevModeContext, ModuleInfo


@pytest.fixture
def runner(monkeypatch):
    monkeypatch.delenv("DEVBRIDGE_SERIALIZATION__FORMAT", raising=False)
    monkeypatch.delenv("DEVBRIDGE_SERIALIZATION__STRICT_SCHEMA_VERSION", raising=False)
    return CliRunner()


@pytest.fixture
def small_context():
    context = DevModeContext()
    context.add_class_path_entry("lib/a.jar")
    context.add_class_path_entry("lib/b.jar")
    context.add_module(
        ModuleInfo(source_path="src", classes_path="classes", resource_path=None)
    )
    context.set_system_property("profile", "dev")
    return context


@pytest.mark.integration
def test_validate_reports_counts(runner, small_context):
    with runner.isolated_filesystem():
        write_context_file(small_context, "context.json")

        result = runner.invoke(app, ["validate", "context.json"])

    assert result.exit_code == 0, result.output
    assert "OK" in result.output
    assert "2 classpath entries, 1 modules, 1 system properties" in result.output


@pytest.mark.integration
def test_validate_fails_on_malformed_file(runner):
    with runner.isolated_filesystem():
        with open("context.json", "w", encoding="utf-8") as f:
            f.write("{broken")

        result = runner.invoke(app, ["validate", "context.json"])

    assert result.exit_code == 1
    assert "Error" in result.output


@pytest.mark.integration
def test_validate_fails_on_schema_mismatch(runner):
    with runner.isolated_filesystem():
        with open("context.json", "w", encoding="utf-8") as f:
            json.dump({"schema_version": SCHEMA_VERSION + 1, "context": {}}, f)

        result = runner.invoke(app, ["validate", "context.json"])

    assert result.exit_code == 1
    assert "schema version" in result.output


@pytest.mark.integration
def test_lenient_config_accepts_schema_mismatch(runner):
    with runner.isolated_filesystem():
        with open(".devbridge.toml", "w", encoding="utf-8") as f:
            f.write("[serialization]\nstrict_schema_version = false\n")
        with open("context.json", "w", encoding="utf-8") as f:
            json.dump({"schema_version": SCHEMA_VERSION + 1, "context": {}}, f)

        result = runner.invoke(app, ["--quiet", "validate", "context.json"])

    assert result.exit_code == 0, result.output
    assert "OK" in result.output


@pytest.mark.integration
def test_show_renders_tables(runner, small_context):
    with runner.isolated_filesystem():
        write_context_file(small_context, "context.yaml")

        result = runner.invoke(app, ["show", "context.yaml"])

    assert result.exit_code == 0, result.output
    for expected in ("Classpath", "lib/a.jar", "lib/b.jar", "Modules", "classes"):
        assert expected in result.output
    assert "profile" in result.output
    assert "dev" in result.output


@pytest.mark.integration
def test_show_with_explicit_format(runner, small_context):
    with runner.isolated_filesystem():
        with open("context.dat", "wb") as f:
            f.write(
                yaml.safe_dump(
                    {
                        "schema_version": SCHEMA_VERSION,
                        "context": small_context.model_dump(mode="json"),
                    }
                ).encode("utf-8")
            )

        default = runner.invoke(app, ["show", "context.dat"])
        explicit = runner.invoke(app, ["show", "--format", "yaml", "context.dat"])

    assert default.exit_code == 1
    assert explicit.exit_code == 0, explicit.output
    assert "lib/a.jar" in explicit.output


@pytest.mark.integration
def test_convert_json_to_yaml(runner, small_context):
    with runner.isolated_filesystem():
        write_context_file(small_context, "context.json")

        result = runner.invoke(app, ["convert", "context.json", "context.yaml"])
        restored = read_context_file("context.yaml")
        with open("context.yaml", encoding="utf-8") as f:
            raw = yaml.safe_load(f)

    assert result.exit_code == 0, result.output
    assert "Wrote yaml context" in result.output
    assert raw["schema_version"] == SCHEMA_VERSION
    assert restored.class_path == small_context.class_path
    assert restored.modules == small_context.modules
    assert restored.system_properties == small_context.system_properties


@pytest.mark.integration
def test_convert_with_explicit_target_format(runner, small_context):
    with runner.isolated_filesystem():
        write_context_file(small_context, "context.json")

        result = runner.invoke(
            app, ["convert", "--to", "yaml", "context.json", "context.out"]
        )
        with open("context.out", encoding="utf-8") as f:
            raw = yaml.safe_load(f)

    assert result.exit_code == 0, result.output
    assert raw["context"]["class_path"] == ["lib/a.jar", "lib/b.jar"]


@pytest.mark.integration
def test_init_config_writes_sample(runner):
    with runner.isolated_filesystem():
        first = runner.invoke(app, ["init-config"])
        second = runner.invoke(app, ["init-config"])
        forced = runner.invoke(app, ["init-config", "--force"])
        with open(".devbridge.toml", encoding="utf-8") as f:
            content = f.read()

    assert first.exit_code == 0, first.output
    assert "Created" in first.output
    assert second.exit_code == 1
    assert "already exists" in second.output
    assert forced.exit_code == 0, forced.output
    assert "[serialization]" in content


@pytest.mark.integration
def test_invalid_config_file_exits_with_error(runner):
    with runner.isolated_filesystem():
        with open("bad.toml", "w", encoding="utf-8") as f:
            f.write('[serialization]\nformat = "xml"\n')
        write_context_file(DevModeContext(), "context.json")

        result = runner.invoke(app, ["--config", "bad.toml", "validate", "context.json"])

    assert result.exit_code == 1
    assert "Configuration validation failed" in result.output


@pytest.mark.integration
def test_conflicting_env_variables_exit_with_error(runner, monkeypatch):
    monkeypatch.setenv("DEVBRIDGE_LOGGING", "x")
    monkeypatch.setenv("DEVBRIDGE_LOGGING__LEVEL", "debug")
    with runner.isolated_filesystem():
        write_context_file(DevModeContext(), "context.json")

        result = runner.invoke(app, ["validate", "context.json"])

    assert result.exit_code == 1
    assert "conflicts with DEVBRIDGE_LOGGING" in result.output
