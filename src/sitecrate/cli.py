"""CLI interface for sitecrate."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from sitecrate.config import SiteCrateConfig, load_config, merge_cli_overrides
from sitecrate.errors import SiteCrateError
from sitecrate.models import ExportOptions, VersionHistoryOptions
from sitecrate.store import SiteStore

app = typer.Typer(
    name="sitecrate",
    help="Export site content to recipes and import recipes into a site.",
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to a .sitecrate.toml file."),
]
DataDirOption = Annotated[
    Optional[Path],
    typer.Option("--data-dir", "-d", help="Site data directory (holds site.json)."),
]
UserOption = Annotated[
    Optional[str],
    typer.Option("--user", "-u", help="Acting user name."),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from sitecrate import __version__

        console.print(f"sitecrate {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging."),
    ] = False,
) -> None:
    """sitecrate - recipe-driven site export and import."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _resolve_config(
    config_path: Path | None, data_dir: Path | None, user: str | None
) -> SiteCrateConfig:
    config = load_config(config_path)
    return merge_cli_overrides(config, data_dir=data_dir, user=user)


@app.command("export")
def export_cmd(
    content_types: Annotated[
        list[str],
        typer.Option("--type", "-t", help="Content type to export (repeatable)."),
    ],
    metadata: Annotated[
        bool,
        typer.Option("--metadata/--no-metadata", help="Export type and part definitions."),
    ] = True,
    settings: Annotated[
        bool,
        typer.Option("--settings/--no-settings", help="Export site settings."),
    ] = False,
    data: Annotated[
        bool,
        typer.Option("--data/--no-data", help="Export content items."),
    ] = False,
    draft: Annotated[
        bool,
        typer.Option("--draft", help="Export latest versions instead of published ones."),
    ] = False,
    config_path: ConfigOption = None,
    data_dir: DataDirOption = None,
    user: UserOption = None,
) -> None:
    """Export the selected sections of the site to a recipe file."""
    config = _resolve_config(config_path, data_dir, user)
    store = SiteStore(config.data_path)

    options = ExportOptions(
        export_metadata=metadata,
        export_site_settings=settings,
        export_data=data,
        version_history_options=(
            VersionHistoryOptions.DRAFT if draft else VersionHistoryOptions.PUBLISHED
        ),
    )

    try:
        path = store.service(config.site.user, config).export(content_types, options)
    except SiteCrateError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1) from exc

    console.print(f"[green]Exported[/green] to {path}")


@app.command("import")
def import_cmd(
    recipe_file: Annotated[
        Path,
        typer.Argument(
            help="Recipe XML file to import.",
            exists=True,
            file_okay=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
    config_path: ConfigOption = None,
    data_dir: DataDirOption = None,
    user: UserOption = None,
) -> None:
    """Execute a recipe file against the site."""
    config = _resolve_config(config_path, data_dir, user)
    store = SiteStore(config.data_path)
    recipe_text = recipe_file.read_text(encoding="utf-8")

    try:
        execution_id = store.service(config.site.user, config).import_recipe(recipe_text)
    except SiteCrateError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1) from exc

    serial = store.shell.get_shell_descriptor().serial_number
    console.print(
        f"[green]Imported[/green] {recipe_file.name} "
        f"(execution {execution_id}, shell serial {serial})"
    )


@app.command("types")
def types_cmd(
    config_path: ConfigOption = None,
    data_dir: DataDirOption = None,
) -> None:
    """List the content types defined in the site."""
    config = _resolve_config(config_path, data_dir, None)
    store = SiteStore(config.data_path)
    definitions = store.definitions.list_type_definitions()
    if not definitions:
        console.print("No content types defined.")
        return

    table = Table(title="Content types")
    table.add_column("Type")
    table.add_column("Display name")
    table.add_column("Parts")
    for definition in definitions:
        table.add_row(
            definition.name,
            definition.display_name,
            ", ".join(tp.part_definition.name for tp in definition.parts),
        )
    console.print(table)


if __name__ == "__main__":
    app()
