"""cssmap CLI entry point."""
from __future__ import annotations

import json
import logging

import click

from cssmap.config import ParseConfig
from cssmap.errors import CssmapError, ParseError
from cssmap.lexer import read_css
from cssmap.parser import parse_stylesheet


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--lenient", is_flag=True, help="Keep a block left open at end of file")
@click.option("--types", is_flag=True, help="Print each selector's type instead of its declarations")
@click.option("--indent", default=2, type=int, help="JSON indentation")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(path: str, lenient: bool, types: bool, indent: int, verbose: bool) -> None:
    """Parse a stylesheet and print it as JSON."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    config = ParseConfig(allow_unclosed_block=lenient)
    try:
        stylesheet = parse_stylesheet(read_css(path), config)
    except ParseError as e:
        click.echo(f"{path}:{e.line}: {e.message}", err=True)
        raise click.exceptions.Exit(1)
    except CssmapError as e:
        click.echo(f"{path}: {e}", err=True)
        raise click.exceptions.Exit(1)

    if types:
        output = {rule: str(rule.type) for rule in stylesheet}
    else:
        output = stylesheet
    click.echo(json.dumps(output, indent=indent))
