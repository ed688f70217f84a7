"""
Command-line interface for pdfgraphx.
"""

import logging
import os
import sys

import click
from rich.console import Console
from rich.table import Table

from pdfgraphx import __version__
from pdfgraphx.core.exceptions import PdfGraphError
from pdfgraphx.merge.merger import merge_pdfs
from pdfgraphx.merge.validators import get_pdf_info

console = Console()


def _configure_logging(verbose):
    level = logging.DEBUG if verbose else logging.WARNING
    for name in ("pdfgraphx.merge", "pdfgraphx.codec"):
        logging.getLogger(name).setLevel(level)


def _info_table(title, info):
    table = Table(title=title, show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("File", os.path.basename(str(info.path)) if info.path else "-")
    table.add_row("Pages", str(info.num_pages))
    table.add_row("Version", info.version)
    table.add_row("Encrypted", "yes" if info.is_encrypted else "no")
    title_value = info.metadata.get("/Title")
    if title_value:
        table.add_row("Title", str(title_value))
    return table


@click.group()
@click.version_option(version=__version__)
def cli():
    """
    pdfgraphx - merge PDF documents into a single page tree.
    """
    pass


@cli.command(name="merge")
@click.argument("inputs", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output", "-o",
    required=True,
    help="Path of the merged PDF",
    type=click.Path(dir_okay=False),
)
@click.option("--no-metadata", is_flag=True, help="Do not copy metadata from the first document")
@click.option("--no-compress", is_flag=True, help="Leave unfiltered streams uncompressed")
@click.option(
    "--inherit/--no-inherit",
    default=True,
    help="Copy inherited page attributes onto each page before merging",
)
@click.option("--title", default=None, help="Title of the merged document")
@click.option("--author", default=None, help="Author of the merged document")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def merge_command(inputs, output, no_metadata, no_compress, inherit, title, author, verbose):
    """
    Merge INPUTS, in the given order, into a single PDF.

    Examples:

        pdfgraphx merge a.pdf b.pdf -o merged.pdf

        pdfgraphx merge a.pdf b.pdf -o merged.pdf --title "Annual report"
    """
    _configure_logging(verbose)
    document_info = {key: value for key, value in (("title", title), ("author", author)) if value}

    try:
        console.print(f"\n[bold cyan]Merging {len(inputs)} PDF(s)...[/bold cyan]")
        result = merge_pdfs(
            inputs,
            output,
            metadata=not no_metadata,
            document_info=document_info or None,
            compress=not no_compress,
            inherit_page_attributes=inherit,
        )
        info = get_pdf_info(result)
    except PdfGraphError as exc:
        console.print(f"[bold red]✗ Error:[/bold red] {exc}")
        sys.exit(1)

    console.print(_info_table("Merged PDF", info))
    console.print(f"\n[bold green]✓ Wrote {info.num_pages} page(s) to {result}[/bold green]\n")


@cli.command(name="info")
@click.argument("input_pdf", type=click.Path(exists=True, dir_okay=False))
def info_command(input_pdf):
    """
    Show page count, version and title of INPUT_PDF.
    """
    try:
        info = get_pdf_info(input_pdf)
    except PdfGraphError as exc:
        console.print(f"[bold red]✗ Error:[/bold red] {exc}")
        sys.exit(1)
    console.print(_info_table("PDF Information", info))


def main():
    cli()


if __name__ == "__main__":  # pragma: no cover
    main()
