#!/usr/bin/env python3
"""
Statement Extraction CLI

Command-line interface built with Click.
Extracts broker transaction statements into typed records and prints them.

Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.

Usage:
    python src/cli.py --help
    python src/cli.py fields --broker degiro
    python src/cli.py extract --file Transactions.csv --output csv
    python src/cli.py transactions --file Transactions.csv
"""

import json
import logging

import click
from tabulate import tabulate

# Local application imports
import constants as const
import util
from brokers.degiro_transactions import DegiroTransactions
from extraction.exceptions import CsvExtractionError, ExtractionError


logger = logging.getLogger(__name__)

BROKERS = {
    "degiro": DegiroTransactions,
}


@click.group()
@click.option("--log-level", default=None, help="Log level (DEBUG, INFO, WARNING, ERROR)")
@click.pass_context
def cli(ctx, log_level):
    """
    Broker Statement Extraction

    Read broker transaction statements and print their records.
    """
    ctx.ensure_object(dict)
    util.setup_logger(name=None, level=log_level, console=False, log_file=const.CLI_LOG_FILE)
    logger.info(f"Starting statement extraction CLI v{const.VERSION}")


@cli.command("fields")
@click.option("--broker", type=click.Choice(const.SUPPORTED_BROKERS), default="degiro", help="Broker format")
def fields(broker):
    """List the fields of a broker statement"""
    processor_cls = BROKERS[broker]
    schema = processor_cls.field_schema()
    rows = [(f.ordinal, f.name, f.type.__name__, "yes" if f.nullable else "no") for f in schema]
    click.echo(tabulate(rows, headers=["Ordinal", "Name", "Type", "Nullable"]))


@cli.command("extract")
@click.option("--file", "fname", required=True, type=click.Path(exists=True, dir_okay=False), help="Path to CSV file")
@click.option("--broker", type=click.Choice(const.SUPPORTED_BROKERS), default="degiro", help="Broker format")
@click.option("--encoding", default=const.DEFAULT_ENCODING, help="Encoding of the file")
@click.option("--output", type=click.Choice(["table", "csv", "json"]), default="table", help="Output format")
@click.option("--max-record-chars", type=click.IntRange(min=1), default=const.DEFAULT_MAX_RECORD_CHARS,
              help="Maximum characters of a single record")
@click.pass_context
def extract(ctx, fname, broker, encoding, output, max_record_chars):
    """Extract the records of a statement"""
    logger.info(f"Extract - file: {fname}, broker: {broker}, encoding: {encoding}, output: {output}")

    try:
        processor = BROKERS[broker](fname, encoding=encoding, max_record_chars=max_record_chars)
        df, start_date, end_date = processor.process()
    except CsvExtractionError as e:
        logger.error(f"Invalid statement {fname}: {e}")
        click.secho(f"✗ Invalid statement {fname} {e}", fg="red", err=True)
        ctx.exit(1)
    except (ExtractionError, ValueError) as e:
        logger.error(f"Error reading statement {fname}: {e}", exc_info=True)
        click.secho(f"✗ Error reading statement {fname}: {e}", fg="red", err=True)
        ctx.exit(1)

    if output == "csv":
        click.echo(df.to_csv(index=False), nl=False)
    elif output == "json":
        click.echo(json.dumps(df.to_dict(orient="records"), default=str, indent=2))
    else:
        if df.empty:
            click.echo("No records found.")
            return
        click.echo(tabulate(df.values, headers=list(df.columns), stralign="right"))
        click.echo()
        click.echo(f"{len(df)} records from {start_date} to {end_date}")


@cli.command("transactions")
@click.option("--file", "fname", required=True, type=click.Path(exists=True, dir_okay=False), help="Path to CSV file")
@click.option("--encoding", default=const.DEFAULT_ENCODING, help="Encoding of the file")
@click.pass_context
def transactions(ctx, fname, encoding):
    """Summarize the transactions of a DEGIRO statement"""
    try:
        result = DegiroTransactions(fname, encoding=encoding).transactions()
    except (ExtractionError, ValueError) as e:
        logger.error(f"Error reading transactions from {fname}: {e}")
        click.secho(f"✗ Error reading transactions from {fname}: {e}", fg="red", err=True)
        ctx.exit(1)

    if not result:
        click.echo("No transactions found.")
        return

    rows = [(t.trade_date, t.isin, t.name, "Buy" if t.is_purchase else "Sell", t.quantity, str(t.total))
            for t in result]
    click.echo(tabulate(rows, headers=["Date", "ISIN", "Name", "Action", "Quantity", "Total"], stralign="right"))


if __name__ == "__main__":
    cli()
