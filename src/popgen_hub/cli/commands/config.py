"""Config command for inspecting and creating settings files."""

from pathlib import Path
from typing import Optional

import typer
import yaml
from rich.console import Console

app = typer.Typer(help="Show and create configuration files")
console = Console()


@app.command("show")
def config_show(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML configuration file"),
):
    """Print the effective settings as YAML."""
    from popgen_hub.core.config import Settings, get_settings
    from popgen_hub.core.exceptions import PopGenHubError

    try:
        settings = Settings.load(config) if config else get_settings()
    except PopGenHubError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(
        yaml.dump(settings.model_dump(mode="json"), default_flow_style=False),
        markup=False,
        highlight=False,
    )


@app.command("init")
def config_init(
    path: Path = typer.Argument(Path("config/default.yaml"), help="Where to write the template"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
):
    """Write a configuration template with the default settings."""
    from popgen_hub.core.config import Settings

    if path.exists() and not force:
        console.print(f"[red]Error: {path} already exists (use --force to overwrite)[/red]")
        raise typer.Exit(1)

    path.parent.mkdir(parents=True, exist_ok=True)
    Settings().to_yaml(path)
    console.print(f"Configuration written to: {path}")


@app.callback()
def callback():
    """Configuration commands."""
    pass
