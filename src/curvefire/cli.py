"""
curvefire command line.

Compile and sample curves outside the game, e.g. to check a submission or
to see where a trajectory goes:

    curvefire check -x "v" -y "u ^ 2" -w "u = 2 * t - 4; v = u + t * 0"
    curvefire sample -x "cos (tau * t)" -y "sin (tau * t)" --samples 5
    curvefire reference
"""

from __future__ import annotations

import json
import logging
import platform
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from curvefire._version import get_version
from curvefire.core.compiler import QUICK_HELP, submit_functions
from curvefire.core.errors import ConfigError
from curvefire.core.manifest import CurvefireConfig, load_config
from curvefire.core.trajectory import sample_curve

app = typer.Typer(
    help="curvefire – compile and sample parametric curves",
    no_args_is_help=True,
)

console = Console()

# Module-level config set by the callback
_config: CurvefireConfig | None = None

XOption = Annotated[str, typer.Option("--x", "-x", help="x(t) expression")]
YOption = Annotated[str, typer.Option("--y", "-y", help="y(t) expression")]
WhereOption = Annotated[
    str, typer.Option("--where", "-w", help="where clause; separate assignments with ';'")
]


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"curvefire version {get_version()}")
        typer.echo(f"  Python:        {platform.python_implementation()} {platform.python_version()}")
        raise typer.Exit()


def _get_config() -> CurvefireConfig:
    global _config
    if _config is None:
        _config = load_config()
    return _config


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version information",
        ),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to curvefire.toml (default: ./curvefire.toml)"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", help="Log compiler activity")] = False,
) -> None:
    """curvefire CLI main callback for global options."""
    global _config
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    try:
        _config = load_config(config_path)
    except ConfigError as e:
        console.print(f"[red]{escape(e.message)}[/red]")
        raise typer.Exit(2) from e


@app.command(name="check")
def check_command(x: XOption, y: YOption, where: WhereOption = "") -> None:
    """Compile a submission and print the status line."""
    submission = submit_functions(x, y, where)
    if submission.ok:
        console.print(f"[green]{submission.status}[/green]")
        return

    console.print(f"[red]{escape(submission.status)}[/red]")
    error = submission.error
    if error is not None and error.context is not None and error.context.snippet is not None:
        console.print(escape(error.context.format()), style="dim", highlight=False)
    raise typer.Exit(1)


@app.command(name="sample")
def sample_command(
    x: XOption,
    y: YOption,
    where: WhereOption = "",
    samples: Annotated[
        int | None,
        typer.Option("--samples", "-n", min=1, help="Number of points (default from config)"),
    ] = None,
    output_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Sample the curve at evenly spaced t in [0, 1]."""
    config = _get_config()
    submission = submit_functions(x, y, where)
    if submission.parametric is None:
        console.print(f"[red]{escape(submission.status)}[/red]")
        raise typer.Exit(1)

    points = sample_curve(submission.parametric, samples or config.samples)

    if output_json:
        data = [{"t": t, "x": px, "y": py} for t, px, py in points]
        console.print_json(json.dumps(data))
        return

    digits = config.precision
    table = Table(title=f"({escape(x)}, {escape(y)})")
    table.add_column("t", justify="right")
    table.add_column("seconds", justify="right", style="dim")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    for t, px, py in points:
        table.add_row(
            f"{t:.{digits}f}",
            f"{t * config.flight_time:.2f}",
            f"{px:.{digits}f}",
            f"{py:.{digits}f}",
        )
    console.print(table)


@app.command(name="reference")
def reference_command() -> None:
    """Print the expression language quick reference."""
    console.print(escape(QUICK_HELP.strip("\n")), highlight=False)


def main() -> None:
    app(standalone_mode=True)


if __name__ == "__main__":
    main()
