"""Tyke command line interface."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from tyke import __version__
from tyke.ast_nodes import format_tree
from tyke.config import TykeConfig, config_for
from tyke.errors import CompileError, DiagnosticRenderer
from tyke.lexer import Lexer
from tyke.parser import Parser
from tyke.source import SourceFile

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


class _EchoHandler(logging.Handler):
    """Writes records with click.echo, so they follow the current stderr."""

    def emit(self, record: logging.LogRecord) -> None:
        click.echo(self.format(record), err=True)


def configure_logging(level: str | int) -> None:
    """Route ``tyke`` log records at ``level`` and above to stderr."""
    logger = logging.getLogger("tyke")
    for handler in list(logger.handlers):
        if isinstance(handler, _EchoHandler):
            logger.removeHandler(handler)
    handler = _EchoHandler()
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)


def _setup(ctx: click.Context, file: str) -> tuple[TykeConfig, SourceFile]:
    try:
        config = config_for(Path(file))
    except ValueError as e:
        raise click.ClickException(str(e))
    verbose = ctx.obj.get("verbose", False) if ctx.obj else False
    configure_logging(logging.DEBUG if verbose else config.log.level)
    return config, SourceFile.load(Path(file))


@click.group()
@click.version_option(__version__, prog_name="tyke")
@click.option("-v", "--verbose", is_flag=True, help="Log intermediate parse results.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """The Tyke typed expression language front end."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--color/--no-color", default=None, help="Override diagnostic colors.")
@click.pass_context
def parse(ctx: click.Context, file: str, color: bool | None) -> None:
    """Parse FILE and print its syntax tree."""
    config, source = _setup(ctx, file)
    use_color = config.diagnostics.color if color is None else color
    renderer = DiagnosticRenderer(color=use_color, source=source)

    parser = Parser(source.content, source.filename)
    try:
        node = parser.parse_expr()
    except CompileError as e:
        for diag in e.diagnostics:
            click.echo(renderer.render(diag), err=True, color=use_color)
        raise SystemExit(1)

    for diag in parser.diagnostics:
        click.echo(renderer.render(diag), err=True, color=use_color)
    click.echo(format_tree(node))


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def tokens(ctx: click.Context, file: str) -> None:
    """Print the lexemes of FILE, one per line."""
    _, source = _setup(ctx, file)
    for lexeme in Lexer(source.content, source.filename):
        click.echo(f"{lexeme.beginning}:{lexeme.end} {lexeme.decode(source.content)}")


@main.command()
def lsp() -> None:
    """Start the Tyke language server."""
    from tyke.lsp import main as lsp_main

    lsp_main()
