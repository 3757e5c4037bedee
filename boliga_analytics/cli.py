#!/usr/bin/env python3
"""
CLI for the property analytics core

Commands:
    summary    - Summary metrics for a filtered view of a sales CSV
    districts  - District ranking by average price or number of sales

Usage:
    boliga-analytics summary data/boliga_sales.csv --window 12
    boliga-analytics summary data/boliga_sales.csv --district "København Ø" --json
    boliga-analytics districts data/boliga_sales.csv --by sales --limit 10
"""

import logging
import sys

import click

from boliga_analytics import __version__
from boliga_analytics.config import Config
from boliga_analytics.services.dashboard_service import PropertyAnalyticsService
from boliga_analytics.services.data_loader import CsvDataSource
from boliga_analytics.services.json_serializer import safe_json_dumps
from boliga_analytics.models import FilterCriteria
from boliga_analytics.utils.formatting import format_dkk
from boliga_analytics.utils.normalize import ValidationError, to_date


def _build_service(csv_path: str, max_rows: int) -> PropertyAnalyticsService:
    return PropertyAnalyticsService(
        CsvDataSource(csv_path),
        max_rows=max_rows if max_rows and max_rows > 0 else None,
    )


def _parse_as_of(ctx, param, value):
    try:
        return to_date(value, field="as_of")
    except ValidationError as e:
        raise click.BadParameter(str(e))


@click.group()
@click.version_option(version=__version__, prog_name="boliga-analytics")
@click.option("--log-level", default=Config.LOG_LEVEL, show_default=True,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False))
def cli(log_level):
    """Property sale analytics over a boliga sales export."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@cli.command("summary")
@click.argument("csv_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--window", default=Config.DEFAULT_DATE_WINDOW, show_default=True,
              help="Months to look back, or 'all'")
@click.option("--search", default="", help="Text to find in street or district")
@click.option("--postcode", default="", help="Postcode or partial postcode")
@click.option("--district", "districts", multiple=True, help="District (repeatable)")
@click.option("--type", "property_types", multiple=True, help="Property type (repeatable)")
@click.option("--price-min", default=None, help="Minimum price (DKK)")
@click.option("--price-max", default=None, help="Maximum price (DKK)")
@click.option("--max-rows", default=Config.MAX_ROWS or 0, show_default=True, type=int,
              help="Rows to load from the file (0 = all)")
@click.option("--as-of", callback=_parse_as_of, help="Reference date YYYY-MM-DD (default: today)")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def summary(csv_path, window, search, postcode, districts, property_types,
            price_min, price_max, max_rows, as_of, output_json):
    """
    Summary metrics for the sales in CSV_PATH that match the filters.
    """
    try:
        criteria = FilterCriteria.from_params({
            'search': search,
            'postcode': postcode,
            'districts': list(districts),
            'property_types': list(property_types),
            'price_min': price_min,
            'price_max': price_max,
            'date_window': window,
        })
    except ValidationError as e:
        raise click.BadParameter(str(e), param_hint=f"--{(e.field or '').replace('_', '-')}")

    service = _build_service(csv_path, max_rows)
    result = service.query(criteria, today=as_of)
    metrics = result.stats.summary

    if output_json:
        click.echo(safe_json_dumps({
            'summary': metrics,
            'price_histogram': result.stats.price_histogram,
            'property_type_counts': result.stats.property_type_counts,
            'meta': result.meta,
        }, indent=2))
        return

    click.echo(f"Total properties:  {metrics.total_count}")
    click.echo(f"Average price:     {format_dkk(metrics.avg_price)}")
    click.echo(f"Average size:      {metrics.avg_size:.0f} m²")
    click.echo(f"Price per m²:      {format_dkk(metrics.avg_price_per_m2)}")
    click.echo(f"Sales last {service.trailing_days} days: {metrics.trailing_volume}")

    if result.stats.price_histogram:
        click.echo()
        click.echo("Price distribution:")
        for bucket in result.stats.price_histogram:
            click.echo(f"  {bucket['range']}: {bucket['count']}")


@cli.command("districts")
@click.argument("csv_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--by", "rank_by", type=click.Choice(["price", "sales"]), default="price",
              show_default=True, help="Rank by average price or number of sales")
@click.option("--limit", default=10, show_default=True, type=int)
@click.option("--window", default="all", show_default=True, help="Months to look back, or 'all'")
@click.option("--max-rows", default=Config.MAX_ROWS or 0, show_default=True, type=int)
@click.option("--as-of", callback=_parse_as_of, help="Reference date YYYY-MM-DD (default: today)")
def districts(csv_path, rank_by, limit, window, max_rows, as_of):
    """
    District ranking for the sales in CSV_PATH.
    """
    service = _build_service(csv_path, max_rows)
    result = service.query(FilterCriteria.from_params({'date_window': window}), today=as_of)

    if rank_by == "sales":
        rows = result.stats.district_sales[:limit]
        for position, row in enumerate(rows, start=1):
            click.echo(f"{position:>3}. {row['district'] or '(unknown)'}: {row['sales']}")
    else:
        rows = result.stats.district_avg_price[:limit]
        for position, row in enumerate(rows, start=1):
            click.echo(f"{position:>3}. {row['district'] or '(unknown)'}: {format_dkk(row['avg_price'])}")

    if not rows:
        click.secho("No sales matched.", fg="yellow")


if __name__ == "__main__":
    cli()
