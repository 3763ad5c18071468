"""Main CLI entry point for devbridge."""

import logging
import sys
from pathlib import Path
from typing import Any, NoReturn

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..adapters.io.context_codec import ContextCodecError, get_codec
from ..adapters.io.handoff_file import (
    ContextFileError,
    format_for_path,
    read_context_file,
    write_context_file,
)
from ..adapters.io.logging_setup import DEVBRIDGE_THEME, setup_logging
from ..config.loader import ConfigLoader, ConfigurationError
from ..config.models import DevBridgeConfig
from ..domain.models import DevModeContext
from ..ports.codec_port import ContextCodecPort

FORMAT_CHOICES = ["json", "yaml"]


class ClickContext:
    """Context object for Click commands."""

    def __init__(self) -> None:
        self.config: DevBridgeConfig | None = None
        self.console: Console = Console(theme=DEVBRIDGE_THEME)
        self.verbose: bool = False
        self.quiet: bool = False

    def codec(self, format_name: str) -> ContextCodecPort:
        """Build a codec for ``format_name`` using the loaded serialization settings."""
        settings = self.config.serialization if self.config else None
        options: dict[str, Any] = {}
        if settings is not None:
            options = {
                "indent": settings.indent,
                "strict_schema_version": settings.strict_schema_version,
            }
        return get_codec(format_name, **options)

    def fail(self, message: str) -> NoReturn:
        """Print an error and exit with status 1."""
        self.console.print(
            f"[error]Error:[/] {escape(message)}", highlight=False, soft_wrap=True
        )
        sys.exit(1)


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Reduce output: set log level to WARNING",
)
@click.pass_context
def app(ctx: click.Context, config: Path | None, verbose: bool, quiet: bool) -> None:
    """devbridge - inspect and convert dev-mode context handoff files."""
    ctx.ensure_object(ClickContext)
    ctx.obj.verbose = verbose
    ctx.obj.quiet = quiet

    try:
        ctx.obj.config = ConfigLoader(config).load_config()
    except ConfigurationError as e:
        ctx.obj.fail(str(e))

    level: int | str = ctx.obj.config.logging.level
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    setup_logging(level, rich_tracebacks=ctx.obj.config.logging.rich_tracebacks)


def _load(obj: ClickContext, file: Path, format_name: str | None) -> DevModeContext:
    codec = obj.codec(format_name or format_for_path(file))
    try:
        return read_context_file(file, codec)
    except (ContextCodecError, ContextFileError) as e:
        obj.fail(str(e))


def _cell(value: str | None) -> str:
    return "-" if value is None else escape(value)


def _render(console: Console, context: DevModeContext) -> None:
    class_path_table = Table(title="Classpath", show_lines=False)
    class_path_table.add_column("#", justify="right", style="muted")
    class_path_table.add_column("Location")
    for index, location in enumerate(context.class_path, start=1):
        class_path_table.add_row(str(index), escape(location))

    modules_table = Table(title="Modules")
    modules_table.add_column("Source")
    modules_table.add_column("Classes")
    modules_table.add_column("Resources")
    for module in context.modules:
        modules_table.add_row(
            _cell(module.source_path),
            _cell(module.classes_path),
            _cell(module.resource_path),
        )

    properties_table = Table(title="System properties")
    properties_table.add_column("Key", style="info")
    properties_table.add_column("Value")
    for key, value in sorted(context.system_properties.items()):
        properties_table.add_row(escape(key), escape(value))

    console.print(class_path_table)
    console.print(modules_table)
    console.print(properties_table)


@app.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--format",
    "format_name",
    type=click.Choice(FORMAT_CHOICES, case_sensitive=False),
    help="Wire format of FILE (inferred from the suffix by default)",
)
@click.pass_obj
def show(obj: ClickContext, file: Path, format_name: str | None) -> None:
    """Decode a handoff file and display its contents."""
    context = _load(obj, file, format_name)
    _render(obj.console, context)


@app.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--format",
    "format_name",
    type=click.Choice(FORMAT_CHOICES, case_sensitive=False),
    help="Wire format of FILE (inferred from the suffix by default)",
)
@click.pass_obj
def validate(obj: ClickContext, file: Path, format_name: str | None) -> None:
    """Check that a handoff file decodes cleanly."""
    context = _load(obj, file, format_name)
    obj.console.print(
        f"[success]OK[/] {escape(str(file))}: {len(context.class_path)} classpath entries, "
        f"{len(context.modules)} modules, "
        f"{len(context.system_properties)} system properties",
        highlight=False,
        soft_wrap=True,
    )


@app.command()
@click.argument("src", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("dest", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--to",
    "target_format",
    type=click.Choice(FORMAT_CHOICES, case_sensitive=False),
    help="Output format (inferred from DEST's suffix by default)",
)
@click.pass_obj
def convert(obj: ClickContext, src: Path, dest: Path, target_format: str | None) -> None:
    """Re-encode a handoff file in another format."""
    context = _load(obj, src, None)
    codec = obj.codec(target_format or format_for_path(dest))
    try:
        write_context_file(context, dest, codec)
    except (ContextCodecError, ContextFileError) as e:
        obj.fail(str(e))
    if not obj.quiet:
        obj.console.print(
            f"Wrote {codec.format_name} context to {escape(str(dest))}",
            highlight=False,
            soft_wrap=True,
        )


@app.command("init-config")
@click.argument(
    "path",
    required=False,
    default=".devbridge.toml",
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option("--force", is_flag=True, help="Overwrite an existing file")
@click.pass_obj
def init_config(obj: ClickContext, path: Path, force: bool) -> None:
    """Write a sample TOML configuration file."""
    if path.exists() and not force:
        obj.fail(f"{path} already exists (use --force to overwrite)")
    try:
        written = ConfigLoader().create_sample_config(path)
    except ConfigurationError as e:
        obj.fail(str(e))
    else:
        obj.console.print(
            f"Created {escape(str(written))}", highlight=False, soft_wrap=True
        )


def main() -> None:
    """Console script entry point."""
    app(obj=ClickContext())


if __name__ == "__main__":
    main()
