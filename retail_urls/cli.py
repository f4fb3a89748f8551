"""CLI utilities."""

import json
import logging
from dataclasses import asdict

import click
from bs4 import BeautifulSoup

from retail_urls.cleaners import clean_url, clean_urls_in_html, clean_urls_in_html_by_strategy
from retail_urls.config import settings
from retail_urls.core.absolutizer import absolutize_urls
from retail_urls.core.srcset import parse_srcset, serialize_srcset
from retail_urls.processing import process_urls


@click.group()
@click.option("--log-level", default=None, help="Override LOG_LEVEL for this run")
def cli(log_level: str):
    """Retail URL canonicalization CLI."""
    logging.basicConfig(
        level=(log_level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command("clean-url")
@click.argument("urls", nargs=-1, required=True)
def clean_url_command(urls):
    """Print the canonical form of each URL."""
    for url in urls:
        click.echo(clean_url(url))


@cli.command("clean-html")
@click.argument("source", type=click.File("r"), default="-")
@click.option("--by-strategy", is_flag=True, help="Run each retailer's own pass in chain order")
def clean_html_command(source, by_strategy: bool):
    """Canonicalize every absolute URL in an HTML document."""
    html = source.read()
    cleaner = clean_urls_in_html_by_strategy if by_strategy else clean_urls_in_html
    click.echo(cleaner(html), nl=False)


@cli.command("absolutize")
@click.argument("source", type=click.File("r"), default="-")
@click.option("--base", default=None, help="Page origin (defaults to DEFAULT_BASE_URL)")
@click.option("--clean", "clean_links", is_flag=True, help="Also canonicalize anchor targets")
def absolutize_command(source, base: str, clean_links: bool):
    """Make every URL in an HTML fragment absolute."""
    soup = BeautifulSoup(source.read(), settings.html_parser)
    if clean_links:
        process_urls(soup, base)
    else:
        absolutize_urls(soup, base)
    click.echo(str(soup), nl=False)


@cli.command("srcset")
@click.argument("raw")
@click.option("--base", default=None, help="Page origin (defaults to DEFAULT_BASE_URL)")
def srcset_command(raw: str, base: str):
    """Show how a srcset value is tokenized and re-serialized."""
    entries = parse_srcset(raw, base)
    for entry in entries:
        click.echo(json.dumps(asdict(entry)))
    click.echo(serialize_srcset(entries))


if __name__ == "__main__":
    cli()
