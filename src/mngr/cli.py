"""CLI interface for mngr."""

from pathlib import Path

import click

from mngr.config import Config


@click.group()
@click.version_option(package_name="mngr")
def cli() -> None:
    """mngr - edit text files in a folder from your browser."""


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover mngr.toml)",
)
@click.option(
    "--data-root",
    "-d",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Directory holding the pages (overrides config)",
)
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--access-log",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="File receiving one line per request (overrides config, default: stderr)",
)
def serve(
    config_path: Path | None,
    data_root: Path | None,
    host: str | None,
    port: int | None,
    access_log: Path | None,
) -> None:
    """Start the editor server."""
    from mngr.server import run_server

    try:
        config = Config.load(config_path).with_overrides(
            host=host,
            port=port,
            data_root=data_root,
            access_log=access_log,
        )
    except ValueError as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e

    root = config.data.root
    if not root.exists():
        root.mkdir(parents=True)
        click.echo(f"Created data root: {root}")

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Data root: {root}")
    if config.logging.access_log is not None:
        click.echo(f"Access log: {config.logging.access_log}")

    run_server(config)


if __name__ == "__main__":
    cli()
