"""Command line interface for crossnegatives."""

import json
import logging
from pathlib import Path

import click
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException
from pydantic import ValidationError

from crossnegatives import __version__
from crossnegatives.core.config import Settings
from crossnegatives.core.exceptions import ConfigurationError, CrossNegativesError
from crossnegatives.data_providers.base import AdsPlatform
from crossnegatives.data_providers.google_ads import GoogleAdsDataProvider
from crossnegatives.data_providers.mock_provider import MockAdsProvider
from crossnegatives.logging.config import setup_logging
from crossnegatives.propagation.engine import CrossNegativePropagator
from crossnegatives.sheets.currency import (
    get_currency_symbol,
    lookup_account_currency,
)
from crossnegatives.sheets.ranges import (
    DECOMPOSITION_SHEET,
    apply_currency_format,
    apply_percentage_format,
)

logger = logging.getLogger(__name__)


def _load_settings(env_file: Path | None) -> Settings:
    try:
        return Settings.from_env(env_file)
    except ValidationError as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e


def _build_platform(settings: Settings, use_mock: bool) -> AdsPlatform:
    if use_mock:
        return MockAdsProvider.with_sample_data()
    if settings.google_ads is None:
        raise ConfigurationError(
            "Google Ads credentials are not configured (XNEG_GOOGLE_ADS__*)"
        )
    return GoogleAdsDataProvider.from_config(
        settings.google_ads, date_range=settings.propagator.date_range
    )


@click.group()
@click.version_option(version=__version__, prog_name="crossnegatives")
def cli():
    """crossnegatives - cross-campaign negative keyword propagation."""
    pass


@cli.command()
@click.option("--dry-run", is_flag=True, help="Log negatives without writing them.")
@click.option(
    "--env-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Read settings from this .env file.",
)
@click.option(
    "--mock", "use_mock", is_flag=True, help="Run against built-in sample data."
)
def run(dry_run: bool, env_file: Path | None, use_mock: bool):
    """Add each campaign's top keywords as negatives to its siblings."""
    settings = _load_settings(env_file)
    if dry_run:
        settings.propagator.dry_run = True
    setup_logging(settings)

    try:
        settings.validate_required_settings()
        platform = _build_platform(settings, use_mock)
        context = CrossNegativePropagator(platform, settings).run()
    except CrossNegativesError as e:
        logger.error(f"Run failed: {e}")
        raise click.ClickException(str(e)) from e

    click.echo(json.dumps(context.summary(), indent=2))
    if context.failures:
        click.echo(f"{len(context.failures)} negatives could not be added", err=True)


@cli.command()
@click.argument("code", required=False)
@click.option(
    "--workbook",
    "workbook_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Look up the currency of the account selected in this workbook.",
)
@click.option(
    "--apply-format",
    is_flag=True,
    help=(
        "Format the decomposition sheet's currency and percentage ranges, "
        "then save the workbook."
    ),
)
def currency(code: str | None, workbook_path: Path | None, apply_format: bool):
    """Show the display symbol of a currency code or workbook account."""
    if code is None and workbook_path is None:
        raise click.UsageError("Pass a currency CODE or --workbook")
    if apply_format and workbook_path is None:
        raise click.UsageError("--apply-format needs --workbook")

    try:
        if workbook_path is None:
            click.echo(f"{code.strip().upper()} {get_currency_symbol(code)}")
            return

        workbook = load_workbook(workbook_path)
        currency_code = lookup_account_currency(workbook)
        symbol = get_currency_symbol(currency_code)
        click.echo(f"{currency_code.value} {symbol}")

        if apply_format:
            if DECOMPOSITION_SHEET not in workbook.sheetnames:
                raise click.ClickException(
                    f"Workbook has no '{DECOMPOSITION_SHEET}' sheet"
                )
            sheet = workbook[DECOMPOSITION_SHEET]
            count = apply_currency_format(sheet, symbol)
            count += apply_percentage_format(sheet)
            workbook.save(workbook_path)
            click.echo(f"Formatted {count} cells")
    except (OSError, InvalidFileException) as e:
        raise click.ClickException(f"Cannot open workbook: {e}") from e
    except CrossNegativesError as e:
        raise click.ClickException(str(e)) from e


def main():
    """Entry point for the crossnegatives console script."""
    cli()


if __name__ == "__main__":
    main()
