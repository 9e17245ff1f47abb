from __future__ import annotations

import json

import click

from .config import load_settings
from .errors import WeatherMailError
from .models import UNIT_SYSTEMS
from .pipeline import run_pipeline


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--api-key", type=str, help="PirateWeather API key")
@click.option("--units", type=click.Choice(UNIT_SYSTEMS, case_sensitive=False), help="Unit system")
@click.option("--locations", type=str, help='JSON array, e.g. \'[{"name": "NYC", "lat": "40.7128", "lon": "-74.006"}]\'')
@click.option("--api-url", type=str, help="Forecast endpoint override")
@click.option("--tz", type=str, help="Fallback time zone for clock times")
@click.option("--out", "out_dir", type=click.Path(path_type=str), help="Artifact directory")
@click.option("--logs-dir", type=click.Path(path_type=str), help="Log directory")
@click.option("--log-level", type=str, help="Logging level")
@click.option("--cache-ttl-minutes", type=int, help="Reuse cached forecasts younger than this")
@click.option("--http-timeout", type=float, help="Per-request timeout in seconds")
@click.option("--html-only", is_flag=True, help="Skip email even if credentials exist")
def main(**kwargs):
    """Fetch forecasts for every configured location and email one combined report."""
    try:
        settings = load_settings(kwargs)
        summary = run_pipeline(settings)
    except (WeatherMailError, json.JSONDecodeError) as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(
        json.dumps(
            {
                "subject": summary.subject,
                "location_count": summary.location_count,
                "html_report": summary.html_report,
                "text_report": summary.text_report,
                "csv_path": summary.csv_path,
                "email_sent": summary.email_sent,
            },
            indent=2,
            ensure_ascii=False,
        )
    )


if __name__ == "__main__":  # pragma: no cover
    main()
