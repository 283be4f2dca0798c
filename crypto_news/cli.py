"""
Command-line interface for crypto-news.

Uses Typer to resolve and render article detail pages and to print the
CoinGecko price table. Supports loading .env files for API key configuration.
"""

from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv
import typer
from rich.console import Console
from rich.table import Table

from .config import load_config
from .core.formatting import resolve_timezone
from .fetch import MarketClient, NewsClient
from .logging_utils import setup_logging
from .page import DetailPageLoader
from .prices import (
    SortState,
    filter_rows,
    format_large_number,
    format_percentage,
    format_price,
    market_stats,
    paginate,
    sort_rows,
)
from .renderer import FORMATS, render, write_output
from .resolver import ArticleResolver
from .sections import available_sections, get_section

app = typer.Typer(add_completion=False)
console = Console()
err_console = Console(stderr=True)


@app.command()
def article(
    section: str = typer.Argument(..., help="Section: news, opinion, follow-up, markets or predictions."),
    route_id: str = typer.Argument(..., help="Article id from the page route."),
    fmt: str | None = typer.Option(None, "--format", "-f", help="Output format: html, markdown or json."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write to this file instead of stdout."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    timezone_name: str | None = typer.Option(None, "--timezone", help="IANA timezone for publication dates."),
    fallback_feed: bool | None = typer.Option(
        None, "--fallback-feed/--no-fallback-feed", help="Serve canned articles when NewsAPI is unreachable."
    ),
    api_key: str | None = typer.Option(
        None,
        "--api-key",
        envvar="NEWS_API_KEY",
        help="Override NewsAPI key (or set NEWS_API_KEY / .env).",
    ),
):
    """Resolve and render one article detail page.

    Fetches the latest headlines, maps ROUTE_ID onto an article for SECTION
    and renders it together with its related list. Feed failures never
    abort the command: fallback content is rendered and a notice printed.
    """
    load_dotenv()

    cfg = load_config(str(config) if config else None)
    if fmt:
        cfg.output.format = fmt
    if log_level:
        cfg.logging.level = log_level
    if timezone_name:
        cfg.resolver.timezone = timezone_name
    if fallback_feed is not None:
        cfg.news_api.use_fallback_feed = fallback_feed
    if api_key:
        cfg.news_api.api_key = api_key

    if cfg.output.format not in FORMATS:
        raise typer.BadParameter(f"format must be one of: {', '.join(FORMATS)}", param_hint="--format")
    try:
        profile = get_section(section)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="SECTION") from exc

    setup_logging(cfg.logging, output.parent if output else None)

    resolver = ArticleResolver(
        profile,
        tz=resolve_timezone(cfg.resolver.timezone),
        related_limit=cfg.resolver.related_limit,
    )
    loader = DetailPageLoader(
        resolver,
        NewsClient(cfg.news_api),
        pool_size=cfg.resolver.pool_size,
        related_pool_size=cfg.resolver.related_pool_size,
    )
    view = loader.load_sync(route_id)
    if view is None:
        raise typer.Exit(code=1)

    if view.error:
        err_console.print(f"[yellow]Notice:[/yellow] {view.error}", markup=True, highlight=False)

    text = render(view, cfg.output.format)
    if output:
        write_output(text, output)
        console.print(f"Article written: {output}")
    else:
        typer.echo(text)


@app.command()
def prices(
    sort: str = typer.Option("market_cap_rank", "--sort", help="Sort column."),
    desc: bool = typer.Option(False, "--desc", help="Sort descending."),
    search: str | None = typer.Option(None, "--search", "-s", help="Filter by name or symbol."),
    category: str = typer.Option("all", "--category", help="all, gainers or losers."),
    page: int = typer.Option(1, "--page", min=1),
    per_page: int = typer.Option(20, "--per-page", min=1),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
):
    """Print the CoinGecko price table."""
    load_dotenv()
    cfg = load_config(str(config) if config else None)
    setup_logging(cfg.logging)

    state = SortState()
    try:
        if sort != state.field:
            state = state.toggle(sort)
        if desc:
            state = state.toggle(sort)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--sort") from exc

    resp = MarketClient(cfg.market).get_market_data(page=1)
    if not resp.success:
        err_console.print(f"[red]Failed to load market data:[/red] {resp.error}")
        raise typer.Exit(code=1)

    try:
        rows = filter_rows(resp.data, search=search, category=category)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--category") from exc
    rows = sort_rows(rows, state.field, state.direction)
    stats = market_stats(rows)
    page_rows, total_pages = paginate(rows, page, per_page)

    table = Table(title=f"Prices (page {min(page, total_pages)}/{total_pages})")
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("Symbol")
    table.add_column("Price", justify="right")
    table.add_column("24h", justify="right")
    table.add_column("Market Cap", justify="right")
    table.add_column("Volume", justify="right")
    for row in page_rows:
        change = row.price_change_percentage_24h
        style = "green" if (change or 0) >= 0 else "red"
        table.add_row(
            str(row.market_cap_rank or "-"),
            row.name,
            row.symbol,
            format_price(row.current_price),
            f"[{style}]{format_percentage(change)}[/{style}]",
            format_large_number(row.market_cap),
            format_large_number(row.total_volume),
        )
    console.print(table)
    console.print(
        f"Market cap {format_large_number(stats.total_market_cap)} · "
        f"24h volume {format_large_number(stats.total_volume)} · "
        f"{stats.gainers} gainers · {stats.losers} losers",
        highlight=False,
    )


@app.command()
def sections():
    """List the sections article pages can be rendered for."""
    for name in available_sections():
        typer.echo(name)


if __name__ == "__main__":
    app()
