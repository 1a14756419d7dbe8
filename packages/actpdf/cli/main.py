"""
Command-line interface for actpdf.
"""

import json
import os
import sys

import click
from rich.console import Console
from rich.table import Table

from actpdf import __version__
from actpdf.core.exceptions import ActPdfError
from actpdf.core.model import ActOptions, AssignmentRecord
from actpdf.core.parser import inspect_pdf
from actpdf.core.utils import ensure_output_parent
from actpdf.document import render_assignment_act

console = Console()


@click.group()
@click.version_option(version=__version__)
def cli():
    """
    actpdf - Render product assignment acts as single-page PDFs.
    """
    pass


@cli.command(name="render")
@click.option('--json', 'json_path', type=click.Path(exists=True, dir_okay=False),
              help='JSON file holding the assignment record (camelCase or snake_case keys)')
@click.option('--product', 'product_name', help='Product or model name')
@click.option('--serial', 'serial_number', help='Serial number')
@click.option('--assigned-to', help='Name of the person receiving the product')
@click.option('--email', 'assigned_email', help='Email of the person receiving the product')
@click.option('--location', help='Delivery location')
@click.option('--date', 'assignment_date', help='Assignment date/time (ISO-8601); defaults to now')
@click.option('--notes', help='Free-text observations')
@click.option('--issuer', 'issuer_name', help='Warehouse staff member issuing the product')
@click.option('--locale', default='es_CL', show_default=True, help='Locale used for the date')
@click.option('--timezone', default='America/Santiago', show_default=True, help='Timezone used for the date')
@click.option('--encoding', 'text_encoding', type=click.Choice(['utf-8', 'cp1252']),
              default='utf-8', show_default=True, help='Byte encoding of page text')
@click.option('--output', '-o', type=click.Path(dir_okay=False),
              help='Output PDF path (defaults to the derived act filename)')
def render(json_path, output, locale, timezone, text_encoding, **fields):
    """
    Render an assignment act PDF.

    Examples:

        actpdf render --product "Laptop X1" --serial SN123 --assigned-to "Jane Doe"

        actpdf render --json assignment.json -o acta.pdf
    """
    try:
        payload = {}
        if json_path:
            with open(json_path, encoding='utf-8') as handle:
                payload = json.load(handle)
            if not isinstance(payload, dict):
                raise click.BadParameter('JSON record must be an object', param_hint='--json')
        payload.update({key: value for key, value in fields.items() if value is not None})

        record = AssignmentRecord.from_mapping(payload)
        options = ActOptions(locale=locale, timezone=timezone, text_encoding=text_encoding)
        result = render_assignment_act(record, options)

        target = ensure_output_parent(output or result.filename)
        target.write_bytes(result.data)

        table = Table(title="Assignment Act", show_header=False)
        table.add_column("Property", style="cyan")
        table.add_column("Value", style="green")
        table.add_row("File", str(target))
        table.add_row("Size", f"{len(result.data)} bytes")
        table.add_row("Objects", str(result.object_count))
        table.add_row("Content stream", f"{result.content_length} bytes")
        console.print(table)
        console.print(f"[bold green]✓ Act written to {os.path.basename(str(target))}[/bold green]")

    except (ActPdfError, ValueError, OSError) as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)


@cli.command(name="inspect")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
def inspect_command(input_pdf):
    """
    Check the header, cross-reference table and stream lengths of a PDF.

    Example:

        actpdf inspect acta-Laptop_X1-SN123.pdf
    """
    try:
        report = inspect_pdf(input_pdf)

        table = Table(title=f"PDF Structure: {os.path.basename(input_pdf)}")
        table.add_column("Property", style="cyan", no_wrap=True)
        table.add_column("Value", style="green")
        table.add_row("Version", report.version)
        table.add_row("Size", f"{report.size} bytes")
        table.add_row("Objects", str(report.object_count))
        table.add_row("startxref", str(report.startxref))
        table.add_row("Root", str(report.root_ref))
        table.add_row("Pages", str(report.page_count))
        if report.media_box:
            table.add_row("MediaBox", " ".join(f"{value:g}" for value in report.media_box))
        console.print(table)

        if report.is_consistent:
            console.print("[bold green]✓ Structure is consistent[/bold green]")
            return
        for problem in report.problems:
            console.print(f"  ✗ {problem}")
        sys.exit(1)

    except ActPdfError as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)


if __name__ == '__main__':
    cli()
