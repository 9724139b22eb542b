from __future__ import annotations

from typing import NoReturn

import typer

from cli.render import render_json, render_text
from logging_config import configure_logging
from services.aggregator import Aggregator
from services.errors import NoDataError, SensorDataError
from services.interchange import read_records

USAGE = """\
crunch_data

Reads the output of fetch_data from standard input and reports the mean and
median of Air Temperature, Barometric Pressure and Wind Speed.

crunch_data [--json] [--help]

--json   Output data in JSON format
--help   Show this message"""

app = typer.Typer(add_completion=False)


def _fail(message: str) -> NoReturn:
    typer.secho(f"crunch_data: {message}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _show_help(value: bool) -> None:
    if value:
        typer.echo(USAGE)
        raise typer.Exit(code=1)


@app.command(
    context_settings={
        "help_option_names": [],
        "allow_extra_args": True,
        "ignore_unknown_options": True,
    }
)
def main(
    ctx: typer.Context,
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output data in JSON format.",
    ),
    show_help: bool = typer.Option(
        False,
        "--help",
        is_eager=True,
        callback=_show_help,
        help="Show this message.",
    ),
) -> None:
    """Summarize sensor rows read from standard input."""
    configure_logging()
    if ctx.args:
        typer.echo("crunch_data: Unknown argument(s) ignored.", err=True)

    stream = typer.get_text_stream("stdin")
    try:
        summary = Aggregator().aggregate(read_records(stream))
        if summary.row_count == 0:
            raise NoDataError("no data read from standard input")
    except SensorDataError as exc:
        _fail(str(exc))
    except UnicodeDecodeError:
        _fail("standard input is not valid UTF-8 text")

    typer.echo(render_json(summary) if json_output else render_text(summary))
