"""Command-line interface for the Scripture Reader."""

import asyncio
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .app import ReaderApp
from .books import chapter_range, find_book, get_books
from .config import APP_NAME, APP_VERSION, FONT_SIZES, TABS
from .notices import Notice, NoticeLevel
from .session import SessionState

# Use ASCII-safe console on Windows to avoid encoding issues
if sys.platform == "win32":
    console = Console(force_terminal=True, legacy_windows=True)
else:
    console = Console()


def print_notice(notice: Notice) -> None:
    """Show a notice as it happens."""
    color = "red" if notice.level is NoticeLevel.ERROR else "green"
    console.print(f"[{color}]{notice.title}: {notice.message}[/{color}]")


def _app(ctx: click.Context) -> ReaderApp:
    app = ctx.obj
    app.preferences.load()
    app.preferences.load_font_size()
    return app


def _resolve_book(query: str):
    book = find_book(query)
    if not book:
        console.print(f"[red]Unknown book: {query}[/red]")
        console.print("Use 'scripture books' to see available books.")
    return book


def _print_chapter(app: ReaderApp) -> None:
    session = app.session
    lines = [f"[bold]{v.verse}.[/bold] {escape(v.text)}" for v in session.verses]
    console.print(Panel(
        "\n".join(lines),
        title=f"{session.book} {session.chapter}",
        border_style=app.preferences.display.theme.primary,
    ))
    console.print("[dim]Use 'scripture favorite' to save a verse.[/dim]")


def _open_chapter(app: ReaderApp, book: str, chapter: int) -> SessionState:
    app.session.select_book(book)
    with console.status(f"Loading {book} {chapter}..."):
        return asyncio.run(app.session.select_chapter(chapter))


@click.group()
@click.version_option(version=__version__)
@click.option("--data-dir", type=click.Path(file_okay=False, path_type=Path), default=None,
              help="Directory holding saved preferences, favorites and position")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx: click.Context, data_dir: Path, verbose: bool):
    """Scripture Reader - read the Bible, keep favorites, resume where you stopped."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    if ctx.obj is None:
        ctx.obj = ReaderApp.from_data_dir(data_dir, notify=print_notice)
        ctx.call_on_close(ctx.obj.close)


@cli.command()
def books():
    """List the books of the Bible."""
    table = Table(title="Livros")
    table.add_column("Abbrev", style="cyan")
    table.add_column("Book", style="green")
    table.add_column("Chapters", style="yellow", justify="right")
    table.add_column("Testament", style="magenta")

    for book in get_books():
        table.add_row(
            book["abbreviation"],
            book["name"],
            str(book["chapters"]),
            book["testament"],
        )

    console.print(table)


@cli.command()
@click.argument("book")
def chapters(book: str):
    """List the chapters of a book."""
    name = _resolve_book(book)
    if not name:
        return
    numbers = chapter_range(name)
    console.print(f"[green]{name}[/green]: {len(numbers)} chapters")
    console.print(" ".join(str(n) for n in numbers))


@cli.command()
@click.argument("book")
@click.argument("chapter", type=int)
@click.pass_context
def read(ctx: click.Context, book: str, chapter: int):
    """Read a chapter and remember it as the last one read."""
    app = _app(ctx)
    name = _resolve_book(book)
    if not name:
        return
    if _open_chapter(app, name, chapter) is SessionState.LOADED:
        _print_chapter(app)


@cli.command()
@click.pass_context
def resume(ctx: click.Context):
    """Reopen the last chapter read."""
    app = ctx.obj
    with console.status("Carregando preferências..."):
        asyncio.run(app.start())
    if app.session.state is SessionState.IDLE:
        console.print("[yellow]Nothing to resume yet. Use 'scripture read' first.[/yellow]")
        return
    if app.session.state is SessionState.LOADED:
        _print_chapter(app)


@cli.command()
@click.argument("book")
@click.argument("chapter", type=int)
@click.argument("verse", type=int)
@click.pass_context
def favorite(ctx: click.Context, book: str, chapter: int, verse: int):
    """Save a verse to the favorites."""
    app = _app(ctx)
    name = _resolve_book(book)
    if not name:
        return
    if _open_chapter(app, name, chapter) is not SessionState.LOADED:
        return
    try:
        app.session.favorite_verse(verse)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")


@cli.command()
@click.pass_context
def favorites(ctx: click.Context):
    """List favorite verses."""
    entries = ctx.obj.favorites.list()
    if not entries:
        console.print("[yellow]No favorites yet.[/yellow]")
        return

    table = Table(title="Favoritos")
    table.add_column("#", style="cyan", width=4)
    table.add_column("Passage", style="green")
    for i, entry in enumerate(entries, 1):
        table.add_row(str(i), escape(entry))
    console.print(table)


@cli.command()
@click.pass_context
def settings(ctx: click.Context):
    """Show the current preferences."""
    display = _app(ctx).preferences.display
    table = Table(title="Configurações")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Dark mode", "on" if display.dark_mode else "off")
    table.add_row("Theme", display.theme.name)
    table.add_row("Tab", display.last_tab.value)
    table.add_row("Font size", f"{display.font_size.value} ({display.point_size}pt)")
    console.print(table)


@cli.command("dark-mode")
@click.argument("state", type=click.Choice(["on", "off"]))
@click.pass_context
def dark_mode(ctx: click.Context, state: str):
    """Turn dark mode on or off."""
    if _app(ctx).preferences.set_dark_mode(state == "on"):
        console.print(f"[green]Dark mode {state}[/green]")


@cli.command("font-size")
@click.argument("size", type=click.Choice(list(FONT_SIZES)))
@click.pass_context
def font_size(ctx: click.Context, size: str):
    """Set the reading font size."""
    if _app(ctx).preferences.set_font_size(size):
        console.print(f"[green]Font size set to {size} ({FONT_SIZES[size]}pt)[/green]")


@cli.command()
@click.argument("name", type=click.Choice(TABS))
@click.pass_context
def tab(ctx: click.Context, name: str):
    """Remember the active tab."""
    if _app(ctx).preferences.set_tab(name):
        console.print(f"[green]Active tab: {name}[/green]")


@cli.command()
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_context
def export(ctx: click.Context, path: Path):
    """Export preferences, reading position and favorites to a JSON file."""
    app = _app(ctx)
    try:
        output = app.export_data(path)
    except OSError as e:
        console.print(f"[red]Could not export data: {e}[/red]")
        return
    console.print(f"[green]Exported to {output}[/green]")


@cli.command()
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def wipe(ctx: click.Context, yes: bool):
    """Erase all saved data. This cannot be undone."""
    if not yes:
        click.confirm(
            "Tem certeza que deseja limpar todos os dados do aplicativo? "
            "Você perderá todos os seus versículos favoritos e configurações.",
            abort=True,
        )
    ctx.obj.wipe_all_data()


@cli.command()
def about():
    """Show information about the application."""
    console.print(Panel(
        f"Versão {APP_VERSION}\n\n"
        "Leitura da Bíblia\n"
        "Versículos favoritos\n"
        "Continue de onde parou",
        title=APP_NAME,
    ))


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
