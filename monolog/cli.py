"""Command-line entry point for emitting monolog records."""

from __future__ import annotations

import sys
from typing import List, Tuple

import click

from monolog import fields, options, processors
from monolog.errors import ConstructionError
from monolog.level import Level
from monolog.logger import new
from monolog.utils.validators import parse_key_value


def _pairs(ctx: click.Context, param: click.Parameter, values: Tuple[str, ...]) -> List[Tuple[str, str]]:
    """Click callback turning repeated ``key=value`` options into pairs."""
    result = []
    for text in values:
        pair, err = parse_key_value(text)
        if err:
            raise click.BadParameter(err, ctx=ctx, param=param)
        result.append(pair)
    return result


@click.group()
def cli() -> None:
    """Monolog-compatible structured logging."""


@cli.command()
@click.argument("message")
@click.option("--level", default="info", help="Severity of the record")
@click.option("--min-level", default=None, help="Gate threshold (defaults to MONOLOG_LEVEL)")
@click.option("--field", "call_fields", multiple=True, callback=_pairs, help="context field key=value")
@click.option("--extra", "extras", multiple=True, callback=_pairs, help="extra field key=value")
@click.option("--bind", "bound", multiple=True, callback=_pairs, help="permanent field key=value")
@click.option("--output", "outputs", multiple=True, help="Output path (repeatable)")
@click.option("--encoding", default=None, type=click.Choice(["json", "console"]))
def emit(
    message: str,
    level: str,
    min_level: str | None,
    call_fields: List[Tuple[str, str]],
    extras: List[Tuple[str, str]],
    bound: List[Tuple[str, str]],
    outputs: Tuple[str, ...],
    encoding: str | None,
) -> None:
    """Write one record built from the environment settings and flags."""
    try:
        severity = Level.parse(level)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--level")

    opts = [options.from_settings()]
    if min_level:
        opts.append(options.with_level(min_level))
    if outputs:
        opts.append(options.with_output_paths(*outputs))
    if encoding:
        opts.append(options.with_encoding(encoding))
    opts.append(options.with_processors(*(processors.static(k, v) for k, v in extras)))

    try:
        logger = new(*opts)
    except ConstructionError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    if bound:
        logger = logger.with_fields(*(fields.string(k, v) for k, v in bound))
    logger.log(severity, message, *(fields.string(k, v) for k, v in call_fields))
    logger.close()


@cli.command()
def levels() -> None:
    """List severities from lowest to highest."""
    for level in Level:
        click.echo(level.label)


if __name__ == "__main__":
    cli()
