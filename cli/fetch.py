from __future__ import annotations

from typing import NoReturn, Optional

import typer

from cli.client import SensorClient
from cli.config import load_config
from logging_config import configure_logging
from services.errors import SensorDataError
from services.fetcher import fetch_rows, parse_target_date

app = typer.Typer(add_completion=False)


def _fail(message: str) -> NoReturn:
    typer.secho(f"fetch_data: {message}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def main(
    ctx: typer.Context,
    date: Optional[str] = typer.Argument(
        None,
        metavar="[YYYYMMDD]",
        help="Date to fetch; defaults to today.",
        show_default=False,
    ),
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Data source base URL (defaults to SENSOR_SOURCE_BASE_URL env or http://lpo.dt.navy.mil).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for each request.",
    ),
) -> None:
    """Fetch one day of sensor readings and print them as merged rows.

    Data comes from the Lake Pend Oreille acoustic research station. Without a
    date the current day is fetched, which may be incomplete. Each output row
    is: Date Time Air_temp Bar_press Wind_speed
    """
    configure_logging()
    try:
        target = parse_target_date(date)
    except SensorDataError as exc:
        _fail(str(exc))

    config = load_config(base_url=base_url, timeout=timeout)
    client = SensorClient(config)
    ctx.call_on_close(client.close)

    try:
        rows = fetch_rows(client, config.base_url, target)
    except SensorDataError as exc:
        _fail(str(exc))

    for row in rows:
        typer.echo(row)
