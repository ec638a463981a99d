"""CLI commands using Typer."""

import asyncio
import logging
import threading
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from zen_quotes import __version__
from zen_quotes.config import Settings, load_config
from zen_quotes.exceptions import ConfigError
from zen_quotes.quotes import DEFAULT_FALLBACKS, Category, Quote, QuoteClient, QuoteFetcher
from zen_quotes.state import QuoteSession

app = typer.Typer(
    name="zen-quotes",
    help="Random quotes with favorites and an offline fallback.",
    no_args_is_help=True,
)
console = Console()

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 2

INTERACTIVE_HELP = (
    "[dim]n[/dim] new quote  [dim]f[/dim] favorite  [dim]r <n>[/dim] remove favorite  "
    "[dim]c <category>[/dim] switch category  [dim]l[/dim] list favorites  [dim]q[/dim] quit"
)


def setup_logging(verbosity: int) -> None:
    """Configure logging based on verbosity level."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def get_config(config_path: Path | None = None) -> Settings:
    """Load configuration with error handling."""
    try:
        settings = load_config(config_path)
        Category.parse(settings.session.default_category)
    except (ConfigError, ValueError) as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(EXIT_CONFIG_ERROR) from None
    return settings


def parse_category(value: str | None, settings: Settings) -> Category:
    """Parse a --category option, defaulting to the configured category."""
    try:
        return Category.parse(value or settings.session.default_category)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_ERROR) from None


def render_quote(quote: Quote | None, loading: bool = False) -> Panel:
    """Panel for the current quote, or a loading indicator."""
    if quote is None:
        text = "[dim]Loading quote...[/dim]" if loading else "[dim]No quote yet.[/dim]"
        return Panel(text, title="Zen Quote")

    body = f'[bold]"{escape(quote.content)}"[/bold]\n\n[dim]- {escape(quote.author)}[/dim]'
    subtitle = f"[cyan]{quote.category}[/cyan]" if quote.category else None
    title = "Zen Quote" + (" [dim](loading...)[/dim]" if loading else "")
    return Panel(body, title=title, subtitle=subtitle)


def render_favorites(favorites) -> Table:
    """Table of favorited quotes with position and category tag."""
    table = Table(title="Favorite Quotes")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Quote")
    table.add_column("Author", style="green")
    table.add_column("Category", style="cyan")

    for i, quote in enumerate(favorites, 1):
        table.add_row(
            str(i), escape(f'"{quote.content}"'), escape(quote.author), quote.category or "-"
        )

    return table


def render_session(session: QuoteSession) -> None:
    """Print the session the way the user should see it."""
    if session.notice:
        console.print(f"[red bold]Error:[/red bold] [red]{escape(session.notice)}[/red]")
    console.print(render_quote(session.current_quote, session.loading))
    if session.can_favorite:
        console.print("[dim]f: add to favorites[/dim]")
    elif session.current_quote is not None:
        console.print("[dim]Already in favorites[/dim]")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"zen-quotes version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase verbosity (-v for INFO, -vv for DEBUG).",
    ),
) -> None:
    """Zen Quotes - random quotes with favorites and an offline fallback."""
    setup_logging(verbose)


@app.command()
def quote(
    category: Annotated[
        str | None, typer.Option("--category", "-c", help="Quote category")
    ] = None,
    retries: Annotated[
        int | None, typer.Option("--retries", "-r", min=0, help="Retries before falling back")
    ] = None,
    config_path: Annotated[Path | None, typer.Option("--config", help="Config file")] = None,
) -> None:
    """Fetch and print a random quote."""
    settings = get_config(config_path)
    selected = parse_category(category, settings)

    async def _fetch() -> tuple[Quote, str | None]:
        async with QuoteClient(settings.api) as client:
            fetcher = QuoteFetcher(client, retry=settings.retry)
            return await fetcher.resolve(selected, retries)

    result, notice = asyncio.run(_fetch())

    if notice:
        console.print(f"[yellow]{notice}[/yellow]")
    console.print(render_quote(result))


@app.command()
def categories() -> None:
    """List available categories."""
    table = Table(title="Categories")
    table.add_column("Category", style="cyan")
    table.add_column("Fallback quotes", justify="right")

    for category in Category:
        label = category.value + (" [dim](any topic)[/dim]" if category.is_wildcard else "")
        table.add_row(label, str(len(DEFAULT_FALLBACKS[category])))

    console.print(table)


@app.command()
def fallback(
    category: Annotated[
        str | None, typer.Option("--category", "-c", help="Quote category")
    ] = None,
) -> None:
    """Print a quote from the offline fallback table."""
    try:
        selected = Category.parse(category or Category.ALL)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_ERROR) from None

    console.print(render_quote(DEFAULT_FALLBACKS.pick(selected)))


async def fetch_and_render(session: QuoteSession, category: str | None = None) -> None:
    """Start a fetch, switching category first when one is given.

    Applied results are drawn by the session's ``on_change`` hook; only the
    loading state is drawn here, when the first attempt left a retry pending.
    """
    if category is None:
        result = await session.fetch()
    else:
        result = await session.select_category(category)
    if result is None:
        render_session(session)


def read_line(prompt: str) -> asyncio.Future:
    """Read one line of input on a daemon thread.

    Keeps the event loop free for pending retries, and a daemon thread blocked
    in ``input()`` does not hold up interpreter shutdown after Ctrl-C.
    """
    loop = asyncio.get_running_loop()
    future = loop.create_future()

    def _settle(line: str | None, error: Exception | None) -> None:
        if future.done():
            return
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(line)

    def _reader() -> None:
        try:
            line = console.input(prompt)
        except Exception as e:
            error, line = e, None
        else:
            error = None
        if not loop.is_closed():
            loop.call_soon_threadsafe(_settle, line, error)

    threading.Thread(target=_reader, name="zen-quotes-input", daemon=True).start()
    return future


async def handle_command(session: QuoteSession, line: str) -> bool:
    """Apply one interactive command to the session.

    Returns:
        False when the user asked to quit.
    """
    command, _, arg = line.strip().partition(" ")
    command = command.lower()
    arg = arg.strip()

    if command in ("q", "quit", "exit"):
        return False

    if command in ("n", "new"):
        await fetch_and_render(session)
    elif command in ("f", "fav", "favorite"):
        if session.add_favorite():
            console.print("[green]Added to favorites[/green]")
        elif session.current_quote is None:
            console.print("[yellow]No quote loaded yet[/yellow]")
        else:
            console.print("[yellow]Already in favorites[/yellow]")
    elif command in ("r", "remove"):
        if not arg.isdigit() or session.favorites.get(int(arg)) is None:
            console.print(f"[red]Error:[/red] No favorite at position '{escape(arg)}'")
        else:
            removed = session.favorites.get(int(arg))
            session.remove_favorite(removed)
            console.print(f"[green]Removed:[/green] {escape(removed.content)}")
    elif command in ("c", "category"):
        try:
            await fetch_and_render(session, category=arg)
        except ValueError as e:
            console.print(f"[red]Error:[/red] {e}")
    elif command in ("l", "list"):
        if len(session.favorites):
            console.print(render_favorites(session.favorites))
        else:
            console.print("[dim]No favorites yet[/dim]")
    elif command == "":
        render_session(session)
    else:
        console.print(f"[red]Unknown command:[/red] {escape(command)}")
        console.print(INTERACTIVE_HELP)

    return True


@app.command()
def interactive(
    category: Annotated[
        str | None, typer.Option("--category", "-c", help="Starting category")
    ] = None,
    config_path: Annotated[Path | None, typer.Option("--config", help="Config file")] = None,
) -> None:
    """Browse quotes interactively and keep favorites for this session."""
    settings = get_config(config_path)
    selected = parse_category(category, settings)

    async def _run() -> None:
        async with QuoteClient(settings.api) as client:
            fetcher = QuoteFetcher(client, retry=settings.retry)
            session = QuoteSession(
                fetcher, settings.retry, settings.session, on_change=render_session
            )
            session.category = selected

            console.print(INTERACTIVE_HELP)
            try:
                await fetch_and_render(session)
                while True:
                    try:
                        line = await read_line("[bold]> [/bold]")
                    except EOFError:
                        console.print()
                        break
                    if not await handle_command(session, line):
                        break
                # Let an in-flight retry chain land before leaving
                await session.drain()
            finally:
                await session.close()

            if len(session.favorites):
                console.print(render_favorites(session.favorites))

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        console.print("\n[dim]Interrupted[/dim]")


if __name__ == "__main__":
    app()
