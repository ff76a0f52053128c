"""Main CLI entry point."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import rich_click as click
from rich.console import Console
from rich.logging import RichHandler

from splade_core import __version__

console = Console(stderr=True)

# Cyan theme
click.rich_click.USE_RICH_MARKUP = True
click.rich_click.STYLE_HELPTEXT_FIRST = True
click.rich_click.STYLE_COMMANDS_TABLE_SHOW_LINES = False
click.rich_click.STYLE_COMMANDS_TABLE_PAD_EDGE = False
click.rich_click.STYLE_COMMANDS_TABLE_BOX = None
click.rich_click.STYLE_OPTIONS_TABLE_BOX = None
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = (
    "Try running 'splade-core --help' for more information."
)
click.rich_click.STYLE_HEADER_TEXT = "bold cyan"
click.rich_click.STYLE_OPTION = "cyan"
click.rich_click.STYLE_SWITCH = "cyan"
click.rich_click.STYLE_METAVAR = "dim white"
click.rich_click.STYLE_USAGE_COMMAND = "cyan"
click.rich_click.STYLE_USAGE = "dim"

click.rich_click.COMMAND_GROUPS = {
    "splade-core": [
        {
            "name": "Commands",
            "commands": ["compile", "clear"],
        }
    ]
}


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def load_bridge(bridge_file: Path) -> Dict[str, Any]:
    """Load the view data from a JSON file.

    Accepts either ``{"spladeBridge": {...}}`` or the bare descriptor.
    """
    try:
        data = json.loads(bridge_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise click.BadParameter(
            f"Invalid JSON in {bridge_file}: {e}", param_hint="--bridge"
        )

    if not isinstance(data, dict):
        raise click.BadParameter(
            "Bridge file must contain a JSON object", param_hint="--bridge"
        )

    if "spladeBridge" not in data:
        data = {"spladeBridge": data}
    return data


@click.group(
    help=f"""
[bold white on cyan] splade-core [/] [bold cyan]v{__version__}[/] Compile the Vue scripts of server views.

Run [bold cyan]splade-core compile VIEW --bridge BRIDGE.json[/] to compile a view.
"""
)
@click.version_option(__version__)
def cli() -> None:
    pass


@cli.command("compile")
@click.argument(
    "view", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.option(
    "--bridge",
    "bridge_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON file with the spladeBridge descriptor (tag, functions, data).",
)
@click.option(
    "--out-dir",
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory for compiled components (default: $SPLADE_COMPILED_SCRIPTS or .splade/compiled).",
)
@click.option(
    "--prettify/--no-prettify",
    default=None,
    help="Run the formatter on the compiled component.",
)
@click.option(
    "--output",
    "-o",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the remaining markup here instead of stdout.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def compile_command(
    view: Path,
    bridge_file: Path,
    out_dir: Optional[Path],
    prettify: Optional[bool],
    output: Optional[Path],
    verbose: bool,
) -> None:
    """Compile the <script setup> block of a view into a Vue component."""
    from splade_core.compiler.exceptions import SpladeCompilerError
    from splade_core.compiler.extractor import compile_view
    from splade_core.config import SpladeConfig

    _configure_logging(verbose)

    config = SpladeConfig.from_env(
        compiled_scripts=out_dir, prettify_compiled_scripts=prettify
    )
    data = load_bridge(bridge_file)

    try:
        markup = compile_view(
            view.read_text(encoding="utf-8"), data, str(view), config=config
        )
    except SpladeCompilerError as e:
        raise click.ClickException(str(e))

    if output:
        output.write_text(markup, encoding="utf-8")
        console.print(f"✅ Wrote markup to [cyan]{output}[/]")
    else:
        click.echo(markup)


@cli.command()
@click.option(
    "--out-dir",
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory for compiled components (default: $SPLADE_COMPILED_SCRIPTS or .splade/compiled).",
)
def clear(out_dir: Optional[Path]) -> None:
    """Remove all compiled Vue components."""
    from splade_core.compiler.sink import ArtifactSink
    from splade_core.config import SpladeConfig

    config = SpladeConfig.from_env(compiled_scripts=out_dir)
    removed = ArtifactSink.from_config(config).clear()
    console.print(f"🧹 Removed {removed} compiled component(s)")


if __name__ == "__main__":
    cli()
