"""
calcline CLI.

Commands:
- eval: evaluate one expression
- repl: answer expressions read from standard input until 'exit'
- tree: show the parse tree of an expression
"""

from __future__ import annotations

import logging
import platform
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from calcline._version import get_version
from calcline.config import DEFAULT_CONFIG_FILE, CalculatorConfig, load_config
from calcline.errors import CalcError, ConfigError, describe
from calcline.expression import evaluate, parse_line
from calcline.expression.nodes import BinaryExpr, Expr
from calcline.logging import setup_logging
from calcline.session import Session

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="""calcline – one-line integer calculator

Expressions use non-negative integers, + - * / and parentheses.
Spaces and a trailing '=' are ignored: "2 + 6 * 6 =" answers 38.
""",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"calcline {get_version()}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        envvar="CALCLINE_CONFIG",
        help=f"Path to a TOML file with a [calculator] table (default: ./{DEFAULT_CONFIG_FILE})",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr"),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Also write log records to this file (rotated at 1 MB)"
    ),
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
) -> None:
    """calcline main callback for global options."""
    setup_logging(verbose, log_file)
    if config_path is None:
        config_path = Path.cwd() / DEFAULT_CONFIG_FILE
    try:
        ctx.obj = load_config(config_path)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)


def _config(ctx: typer.Context) -> CalculatorConfig:
    return ctx.obj if isinstance(ctx.obj, CalculatorConfig) else CalculatorConfig()


@app.command("eval")
def eval_command(
    ctx: typer.Context,
    expression: str = typer.Argument(..., help="Expression, e.g. '(2 + 6) * 6'"),
    explain: bool = typer.Option(
        False, "--explain", "-e", help="Describe why an expression was rejected"
    ),
) -> None:
    """Evaluate one expression and print the result."""
    config = _config(ctx)
    try:
        expr = parse_line(expression, config)
        result = evaluate(expr, bits=config.int_bits)
    except CalcError as e:
        logger.debug("Rejected %r: %s: %s", expression, describe(e), e.message)
        if explain:
            typer.echo(f"{describe(e)}: {e}", err=True)
        else:
            typer.echo(config.invalid_message, err=True)
        raise typer.Exit(code=1)
    typer.echo(str(result))


@app.command("repl")
def repl_command(ctx: typer.Context) -> None:
    """Answer expressions from standard input until the exit command."""
    config = _config(ctx)

    def write(text: str) -> None:
        typer.echo(text, nl=False)

    session = Session(config, write)
    count = session.run(iter(sys.stdin.readline, ""))
    logger.debug("Session ended after %d expressions", count)


def _build_tree(expr: Expr, tree: Tree | None = None) -> Tree:
    if isinstance(expr, BinaryExpr):
        label = f"[bold magenta]{expr.op.value}[/]"
    else:
        label = f"[cyan]{expr}[/]"
    node = Tree(label) if tree is None else tree.add(label)
    if isinstance(expr, BinaryExpr):
        _build_tree(expr.left, node)
        _build_tree(expr.right, node)
    return node


@app.command("tree")
def tree_command(
    ctx: typer.Context,
    expression: str = typer.Argument(..., help="Expression to parse"),
) -> None:
    """Show the parse tree of an expression and its value."""
    config = _config(ctx)
    console = Console()
    try:
        expr = parse_line(expression, config)
    except CalcError as e:
        console.print(f"[red]{describe(e)}:[/red] {escape(e.message)}")
        raise typer.Exit(code=1)

    console.print(_build_tree(expr))
    console.print(f"[dim]{expr.node_count()} nodes, depth {expr.depth}[/dim]")
    try:
        console.print(f"= [green]{evaluate(expr, bits=config.int_bits)}[/green]")
    except CalcError as e:
        console.print(f"[red]{describe(e)}:[/red] {escape(e.message)}")
        raise typer.Exit(code=1)


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


if __name__ == "__main__":
    main(sys.argv[1:])
