"""Command-line interface for shogiban."""

from pathlib import Path

import typer
from omegaconf import OmegaConf
from rich.console import Console

from shogiban import __version__
from shogiban.core.configs import (
    AppConfig,
    config_from_dict,
    config_to_dict,
    load_config,
    save_config,
)
from shogiban.core.errors import SerializedFormError
from shogiban.core.shogi.engine import ShogiPosition
from shogiban.core.shogi.validation import FragmentDecodeError
from shogiban.core.utils.logging import setup_logging
from shogiban.host.location import FragmentLocation
from shogiban.host.terminal import TerminalEffects, TerminalSession, render_view
from shogiban.session import build_view, decode as decode_fragment, encode as encode_position
from shogiban.session.controller import SessionController
from shogiban.session.intent import NO_INTENT

app = typer.Typer(
    name="shogiban",
    help="shogiban: interactive shogi board with shareable links",
    add_completion=False,
)
console = Console()


def _load_app_config(config: Path | None, overrides: list[str] | None) -> AppConfig:
    """Build the effective config, exiting with a message if it is unusable."""
    try:
        if config is None:
            raw = OmegaConf.from_dotlist(overrides or [])
        else:
            raw = load_config(config, overrides)
        return config_from_dict(OmegaConf.to_container(raw))
    except (FileNotFoundError, TypeError, ValueError) as e:
        console.print(f"[red]Bad configuration: {e}[/red]")
        raise typer.Exit(1) from e


@app.command()
def version() -> None:
    """Print version information."""
    console.print(f"[bold blue]shogiban[/bold blue] v{__version__}")


@app.command()
def play(
    fragment: str = typer.Option("", "--fragment", "-f", help="Shared link fragment to resume"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to a YAML config"),
    override: list[str] | None = typer.Option(
        None, "--set", "-s", help="Config override, e.g. logging.level=DEBUG"
    ),
) -> None:
    """Play an interactive game in the terminal."""
    app_config = _load_app_config(config, override)
    setup_logging(
        level=app_config.logging.level,
        log_file=app_config.logging.file,
        rotation=app_config.logging.rotation,
        retention=app_config.logging.retention,
    )

    location = FragmentLocation(fragment=fragment)
    effects = TerminalEffects(console)
    controller = SessionController(location, effects=effects, config=app_config.session)
    TerminalSession(controller, location, effects, display=app_config.display).run()


@app.command("config")
def show_config(
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to a YAML config"),
    override: list[str] | None = typer.Option(
        None, "--set", "-s", help="Config override, e.g. logging.level=DEBUG"
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write the effective config to this YAML file"
    ),
) -> None:
    """Print or save the effective configuration after overrides."""
    data = config_to_dict(_load_app_config(config, override))
    if output is None:
        console.print(OmegaConf.to_yaml(data), end="", soft_wrap=True, markup=False)
        return

    save_config(data, output)
    console.print(f"[green]Saved config to[/green] {output}")


@app.command()
def decode(
    fragment: str = typer.Argument(..., help="Link fragment (with or without '#')"),
) -> None:
    """Show the position stored in a shared link fragment."""
    try:
        position = decode_fragment(fragment)
    except FragmentDecodeError as e:
        console.print(f"[red]{type(e).__name__}: {e}[/red]")
        raise typer.Exit(1) from e

    console.print(render_view(build_view(NO_INTENT, position), AppConfig().display))
    console.print(f"[dim]{position.serialize()}[/dim]")


@app.command()
def encode(
    position_text: str = typer.Argument(
        ..., help="SFEN, optionally followed by 'moves <usi> ...'"
    ),
) -> None:
    """Print the link fragment for a position."""
    try:
        position = ShogiPosition.from_serialized(position_text)
    except SerializedFormError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e

    console.print(encode_position(position), soft_wrap=True)


if __name__ == "__main__":
    app()
