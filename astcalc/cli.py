import logging
from typing import Iterable, Iterator, Optional, TextIO

import click

from astcalc.parser import ParseFailure, parse
from astcalc.runtime import evaluate
from astcalc.store import VariableStore
from astcalc.tokenizer import IDENTIFIER_RE, WHITESPACE
from astcalc.utils import format_number

logger = logging.getLogger(__name__)


def _parse_definitions(ctx: click.Context, param: click.Parameter, values: tuple[str, ...]) -> dict[str, float]:
    definitions: dict[str, float] = {}
    for value in values:
        name, sep, number = value.partition("=")
        name = name.strip()
        if not sep or not IDENTIFIER_RE.fullmatch(name):
            raise click.BadParameter(f"expected NAME=VALUE, got {value!r}", ctx=ctx, param=param)
        try:
            definitions[name] = float(number)
        except ValueError:
            raise click.BadParameter(f"{number.strip()!r} is not a number", ctx=ctx, param=param)
    return definitions


def _stdin_lines() -> Iterator[str]:
    stdin = click.get_text_stream("stdin")
    if not stdin.isatty():
        yield from stdin
        return

    click.echo("Reading stdin")
    while True:
        try:
            yield input("> ")
        except EOFError:
            return


def run_line(code: str, variables: VariableStore) -> bool:
    """Evaluate one line and print the outcome. Returns False if it failed."""
    try:
        parsed = parse(code)
    except Exception as e:
        logger.debug("Parsing %r failed", code, exc_info=True)
        click.echo(f"Parser error: {e}")
        return False

    if isinstance(parsed, ParseFailure):
        click.echo(parsed)
        click.echo("Parse error")
        return False

    try:
        result = evaluate(parsed.tree, variables)
    except Exception as e:
        logger.debug("Evaluation of %r failed", code, exc_info=True)
        click.echo(f"Evaluation error: {e}")
        return False

    click.echo(f"evaluate() = {format_number(result)}")
    return True


def run_lines(lines: Iterable[str], variables: VariableStore) -> int:
    failures = 0
    for line in lines:
        code = line.rstrip("\r\n")
        if not code.strip(WHITESPACE):
            continue
        if not run_line(code, variables):
            failures += 1
    return failures


@click.command()
@click.option("--expression", "-e", multiple=True, help="Expression to evaluate. May be repeated.")
@click.option(
    "--input-file",
    "-f",
    type=click.File("r"),
    help="File with one expression per line.",
)
@click.option(
    "--define",
    "-D",
    multiple=True,
    metavar="NAME=VALUE",
    callback=_parse_definitions,
    help="Initial variable binding. May be repeated.",
)
@click.option("--no-defaults", default=False, is_flag=True, help="Do not predefine x and pi.")
@click.option("--debug", default=False, is_flag=True, help="Debug/trace output.")
def main(
    expression: tuple[str, ...],
    input_file: Optional[TextIO],
    define: dict[str, float],
    no_defaults: bool,
    debug: bool,
) -> None:
    """
    Evaluate arithmetic, boolean and assignment expressions line by line.
    """
    logging.basicConfig(level=logging.DEBUG if debug else logging.WARNING, format="%(name)s: %(message)s")

    if expression and input_file is not None:
        raise click.UsageError("--expression and --input-file are mutually exclusive")

    variables = VariableStore(define) if no_defaults else VariableStore.with_defaults(define)
    logger.debug("Initial variables: %r", dict(variables))

    if expression:
        lines: Iterable[str] = expression
    elif input_file is not None:
        lines = input_file
    else:
        lines = _stdin_lines()

    failures = run_lines(lines, variables)
    logger.debug("Done, %d line(s) failed", failures)
