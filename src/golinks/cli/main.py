"""CLI for golinks: serve / get / set / delete / list / dump / compact."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from golinks.core.config import AppSettings, ObservabilityConfig, StoreConfig
from golinks.core.logging_config import setup_logging
from golinks.exceptions import GoLinksError
from golinks.persistence.file_backend import FileLinkStore

app = typer.Typer(name="golinks", help="Name to link redirects backed by an append-only log")
console = Console()

_FILE_OPTION = typer.Option(None, "--file", "-f", help="Link log file (default: GOLINKS_STORE_PATH)")
_FUZZY_OPTION = typer.Option(None, "--fuzzy/--exact", help="Fuzzy name matching")


def _store_config(file: Optional[Path], fuzzy: Optional[bool], compact: bool = False) -> StoreConfig:
    """Build store config, overriding env defaults with CLI flags."""
    overrides: dict = {"backend": "file"}
    if file is not None:
        overrides["path"] = file
    if fuzzy is not None:
        overrides["fuzzy"] = fuzzy
    if compact:
        overrides["compact_on_open"] = True
    return StoreConfig(**overrides)


def _open(config: StoreConfig) -> FileLinkStore:
    try:
        return FileLinkStore.open(
            config.path,
            fuzzy=config.fuzzy,
            compact=config.compact_on_open,
            sync_writes=config.sync_writes,
        )
    except GoLinksError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)


def _setup_cli_logging(verbose: bool) -> None:
    setup_logging(ObservabilityConfig(log_level="DEBUG" if verbose else "WARNING"))


@app.command()
def serve(
    file: Optional[Path] = _FILE_OPTION,
    fuzzy: Optional[bool] = _FUZZY_OPTION,
    compact: bool = typer.Option(False, "--compact", help="Compact the log before serving"),
    host: Optional[str] = typer.Option(None, help="Bind address"),
    port: Optional[int] = typer.Option(None, help="Port"),
) -> None:
    """Run the redirect server."""
    settings = AppSettings()
    settings.store = _store_config(file, fuzzy, compact)
    if host:
        settings.server.host = host
    if port:
        settings.server.port = port

    try:
        import uvicorn
    except ImportError:
        console.print("[bold red]Error:[/bold red] uvicorn not installed")
        raise typer.Exit(code=1)

    from golinks.api.app import create_app

    console.print(f"[bold]Links:[/bold] {settings.store.path} (fuzzy={settings.store.fuzzy})")
    console.print(f"[bold]Listening:[/bold] http://{settings.server.host}:{settings.server.port}\n")
    uvicorn.run(create_app(settings), host=settings.server.host, port=settings.server.port)


@app.command()
def get(
    name: str = typer.Argument(..., help="Link name"),
    file: Optional[Path] = _FILE_OPTION,
    fuzzy: Optional[bool] = _FUZZY_OPTION,
) -> None:
    """Print the link stored under NAME."""
    with _open(_store_config(file, fuzzy)) as store:
        link, found = store.get(name)
    if not found:
        console.print(f"[yellow]No link named {name}[/yellow]")
        raise typer.Exit(code=1)
    console.print(link, soft_wrap=True, markup=False)


@app.command("set")
def set_link(
    name: str = typer.Argument(..., help="Link name"),
    link: str = typer.Argument(..., help="Absolute URL"),
    file: Optional[Path] = _FILE_OPTION,
    fuzzy: Optional[bool] = _FUZZY_OPTION,
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Store LINK under NAME."""
    from golinks.services.link_service import normalize_link

    _setup_cli_logging(verbose)
    with _open(_store_config(file, fuzzy)) as store:
        try:
            normalized = normalize_link(link)
            store.set(name, normalized)
        except (GoLinksError, ValueError) as e:
            console.print(f"[bold red]Error:[/bold red] {e}")
            raise typer.Exit(code=1)
    console.print(f"[green]{name}[/green] -> {normalized}")


@app.command()
def delete(
    name: str = typer.Argument(..., help="Link name"),
    file: Optional[Path] = _FILE_OPTION,
    fuzzy: Optional[bool] = _FUZZY_OPTION,
) -> None:
    """Delete NAME by appending a tombstone."""
    with _open(_store_config(file, fuzzy)) as store:
        if name not in store:
            console.print(f"[yellow]No link named {name}[/yellow]")
            raise typer.Exit(code=1)
        store.set(name, "")
    console.print(f"Deleted [green]{name}[/green]")


@app.command("list")
def list_links(
    file: Optional[Path] = _FILE_OPTION,
    fuzzy: Optional[bool] = _FUZZY_OPTION,
) -> None:
    """List live links, most recently written first."""
    with _open(_store_config(file, fuzzy)) as store:
        items = store.items()

    table = Table(title=f"Links ({len(items)})")
    table.add_column("Name", style="cyan")
    table.add_column("Link")
    for name, link in items:
        table.add_row(name, link)
    console.print(table)


@app.command()
def dump(
    target: Path = typer.Argument(..., help="Where to write the compacted snapshot"),
    file: Optional[Path] = _FILE_OPTION,
    fuzzy: Optional[bool] = _FUZZY_OPTION,
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Write a live-only snapshot to TARGET without touching the link log."""
    _setup_cli_logging(verbose)
    config = _store_config(file, fuzzy)
    if target.resolve() == config.path.resolve():
        console.print("[bold red]Error:[/bold red] use `golinks compact` to rewrite the live log")
        raise typer.Exit(code=1)

    with _open(config) as store:
        try:
            written = store.dump(target)
        except GoLinksError as e:
            console.print(f"[bold red]Error:[/bold red] {e}")
            raise typer.Exit(code=1)
    console.print(f"Wrote {written} links to [green]{target}[/green]")


@app.command()
def compact(
    file: Optional[Path] = _FILE_OPTION,
    fuzzy: Optional[bool] = _FUZZY_OPTION,
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Rewrite the link log so it holds one line per live link."""
    _setup_cli_logging(verbose)
    config = _store_config(file, fuzzy, compact=True)
    size_before = config.path.stat().st_size if config.path.exists() else 0
    with _open(config) as store:
        live = len(store)
    size_after = config.path.stat().st_size
    console.print(f"Compacted to {live} links ({size_before} -> {size_after} bytes): [green]{config.path}[/green]")


if __name__ == "__main__":
    app()
