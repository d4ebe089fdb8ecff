"""Typer based command line entry points for pricesheet."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from pricesheet.config import RunConfig, load_config
from pricesheet.core.columns import column_index, column_letters
from pricesheet.core.entries import AddressingMode
from pricesheet.core.errors import (
    ConfigError,
    FieldIndexError,
    InvalidAddressError,
    MalformedRowError,
    NoDataError,
)
from pricesheet.logger import get_logger
from pricesheet.core.placeholders import find_placeholders
from pricesheet.services.price_sheet import build_price_sheet
from pricesheet.services.template_fill import fill_template
from pricesheet_io.csv_reader import CsvDecodeError
from pricesheet_io.pdf_io import PdfProcessingError, read_info, read_page_content

EXIT_DATA_ERROR = 1
EXIT_CONFIG_ERROR = 2

app = typer.Typer(help="Turn semicolon-delimited price lists into PDF documents.")


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        help="Set global logging level (e.g. DEBUG/INFO/WARNING).",
    ),
) -> None:
    """Configure global CLI behaviour before executing commands."""

    logger = get_logger()

    level_value = getattr(logging, log_level.upper(), None)
    if not isinstance(level_value, int):
        raise typer.BadParameter(f"Unknown log level: {log_level}")

    logging.getLogger().setLevel(level_value)
    logger.setLevel(level_value)


def _load(config_path: Optional[Path], **overrides: object) -> RunConfig:
    try:
        return load_config(config_path).with_overrides(**overrides)
    except ConfigError as exc:
        typer.secho(f"Configuration error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from exc


@app.command("fill")
def cli_fill(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML run configuration."),
    csv: Optional[Path] = typer.Option(None, "--csv", help="Semicolon-delimited export."),
    template: Optional[Path] = typer.Option(None, "--template", help="Template PDF with ${COLUMN} tokens."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Filled PDF destination."),
    start_line: Optional[int] = typer.Option(None, "--start-line", min=0, help="Header lines to skip."),
    start_line_file: Optional[Path] = typer.Option(
        None, "--start-line-file", help="File whose first line holds the header lines to skip."
    ),
    limit: Optional[int] = typer.Option(None, "--limit", min=0, help="Maximum rows read from the export."),
) -> None:
    """Fill the template's placeholders with the first data row."""

    logger = get_logger()
    cfg = _load(
        config_path,
        csv=csv,
        template=template,
        output=output,
        start_line=start_line,
        start_line_file=start_line_file,
        limit=limit,
    )

    try:
        result = fill_template(
            cfg.require("template"),
            cfg.require("output"),
            cfg.require("csv"),
            cfg.resolve_start_line(),
            cfg.limit,
            delimiter=cfg.delimiter,
            encoding=cfg.encoding,
            pdf_encoding=cfg.pdf_encoding,
        )
    except (ConfigError, CsvDecodeError, FileNotFoundError, PdfProcessingError) as exc:
        logger.error("Template fill failed: %s", exc)
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from exc
    except (NoDataError, InvalidAddressError, FieldIndexError) as exc:
        logger.error("Template fill failed: %s", exc)
        raise typer.Exit(code=EXIT_DATA_ERROR) from exc

    typer.echo(f"Placeholders filled: {result.placeholders}")
    typer.echo(f"Output: {result.output_path}")


@app.command("sheet")
def cli_sheet(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML run configuration."),
    csv: Optional[Path] = typer.Option(None, "--csv", help="Semicolon-delimited export."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Price sheet PDF destination."),
    addressing: Optional[AddressingMode] = typer.Option(
        None, "--addressing", case_sensitive=False, help="Address fields by column letters or positions."
    ),
    start_line: Optional[int] = typer.Option(None, "--start-line", min=0, help="Header lines to skip."),
    trailing_break: Optional[bool] = typer.Option(
        None,
        "--trailing-break/--no-trailing-break",
        help="Add a page break after the last entry.",
    ),
) -> None:
    """Render one page per valid row of the export."""

    logger = get_logger()
    cfg = _load(
        config_path,
        csv=csv,
        output=output,
        addressing=addressing,
        start_line=start_line,
        trailing_page_break=trailing_break,
    )

    try:
        result = build_price_sheet(
            cfg.require("csv"),
            cfg.require("output"),
            cfg.accessor(),
            cfg.entry_layout(),
            cfg.resolve_start_line(),
            delimiter=cfg.delimiter,
            encoding=cfg.encoding,
            trailing_page_break=cfg.trailing_page_break,
        )
    except (ConfigError, CsvDecodeError, FileNotFoundError) as exc:
        logger.error("Price sheet failed: %s", exc)
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from exc
    except (NoDataError, MalformedRowError) as exc:
        logger.error("Price sheet failed: %s", exc)
        raise typer.Exit(code=EXIT_DATA_ERROR) from exc

    typer.echo(f"Pages written: {result.entries}")
    typer.echo(f"Rows skipped: {len(result.rejected)}")
    typer.echo(f"Output: {result.output_path}")


@app.command("inspect")
def cli_inspect(
    template: Path = typer.Argument(..., help="Template PDF to inspect."),
    pdf_encoding: str = typer.Option("latin-1", "--pdf-encoding", help="Content stream text encoding."),
) -> None:
    """List the placeholders on the template's first page."""

    try:
        info = read_info(template)
        content = read_page_content(template, page_number=1, encoding=pdf_encoding)
    except (FileNotFoundError, PdfProcessingError) as exc:
        typer.secho(f"Cannot read template: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from exc

    typer.echo(f"Pages: {info.page_count}")
    addresses = find_placeholders(content)
    if not addresses:
        typer.echo("No placeholders found")
        return

    indices: list[int] = []
    invalid = 0
    for address in addresses:
        try:
            index = column_index(address)
        except InvalidAddressError:
            invalid += 1
            typer.secho(f"  ${{{address}}} -> invalid column address", fg=typer.colors.RED)
            continue
        indices.append(index)
        typer.echo(f"  ${{{address}}} -> index {index}")
    if indices:
        widest = max(indices)
        typer.echo(f"Rows need at least {widest + 1} fields (through column {column_letters(widest)})")
    if invalid:
        raise typer.Exit(code=EXIT_DATA_ERROR)


if __name__ == "__main__":
    app()
