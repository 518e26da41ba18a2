"""
Command-line interface for the vendor balance reconciliation tool.
"""

from pathlib import Path
from typing import Optional
import json
import logging
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from . import __version__
from .analysis.ai_client import build_ai_client
from .analysis.service import AnalysisStatus, ReconciliationService
from .config import ReconConfig, generate_default_config, load_config
from .matching.engine import IndicatorAggregator
from .matching.line_extractor import LineExtractor
from .matching.vendor_matcher import VendorMatcher
from .models.evidence import Verdict, VendorIndicators
from .parsers.source_reader import SourceReader
from .reports.excel_generator import EvidenceReportGenerator
from .utils.logging_config import setup_logging

console = Console()

VERDICT_STYLES = {
    Verdict.BALANCES_EQUAL: "green",
    Verdict.BALANCES_DIFFERENT: "red",
    Verdict.INSUFFICIENT_DATA: "yellow",
}


def _parse_sources(ctx, param, values) -> dict[str, Path]:
    """Turn repeated KEY=PATH options into a mapping."""
    sources: dict[str, Path] = {}
    for value in values:
        key, sep, path = value.partition("=")
        if not sep or not key.strip() or not path.strip():
            raise click.BadParameter(f"expected KEY=PATH, got '{value}'")
        file_path = Path(path.strip())
        if not file_path.is_file():
            raise click.BadParameter(f"file not found: {file_path}")
        sources[key.strip()] = file_path
    return sources


@click.group()
@click.version_option(version=__version__)
def main():
    """Vendor Balance Reconciliation Tool."""
    pass


@main.command()
@click.argument("vendor")
@click.option(
    "-s",
    "--source",
    "sources",
    multiple=True,
    required=True,
    callback=_parse_sources,
    help="Extracted report text as KEY=PATH (e.g. ledger=razao.txt); repeatable",
)
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file (YAML)",
)
@click.option("-o", "--output", type=click.Path(path_type=Path), help="Output Excel file path")
@click.option(
    "--json-output", type=click.Path(path_type=Path), help="Write the result as JSON"
)
@click.option("--analyze", is_flag=True, help="Ask the reasoning service for a diagnosis")
@click.option(
    "--presence-threshold",
    type=click.FloatRange(0.0, 1.0),
    default=None,
    help="Override the vendor presence threshold",
)
@click.option(
    "--extraction-threshold",
    type=click.FloatRange(0.0, 1.0),
    default=None,
    help="Override the line extraction threshold",
)
@click.option(
    "--tolerance",
    type=click.FloatRange(min=0.0),
    default=None,
    help="Override the balance equality tolerance",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("--dry-run", is_flag=True, help="Show results without generating the report")
def reconcile(
    vendor: str,
    sources: dict[str, Path],
    config: Optional[Path],
    output: Optional[Path],
    json_output: Optional[Path],
    analyze: bool,
    presence_threshold: Optional[float],
    extraction_threshold: Optional[float],
    tolerance: Optional[float],
    verbose: bool,
    dry_run: bool,
):
    """
    Reconcile a vendor's balance across extracted report texts.

    VENDOR: Vendor name as registered in the accounting system
    """
    setup_logging(logging.DEBUG if verbose else logging.INFO)

    try:
        recon_config = load_config(config)
        if not verbose:
            setup_logging(recon_config.logging.level, log_format=recon_config.logging.format)
        _apply_overrides(recon_config, presence_threshold, extraction_threshold, tolerance)

        outcome = None
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task("Reading report texts...", total=None)
            documents = SourceReader(recon_config).read_many(sources)
            progress.update(task, completed=True)

            if analyze:
                task = progress.add_task("Running reconciliation analysis...", total=None)
                client = build_ai_client(recon_config.analysis)
                service = ReconciliationService(recon_config, client)
                outcome = service.reconcile(vendor, documents)
                indicators = outcome.indicators
            else:
                task = progress.add_task("Extracting vendor evidence...", total=None)
                indicators = IndicatorAggregator(recon_config).build_indicators(
                    vendor, {key: doc.text for key, doc in documents.items()}
                )
            progress.update(task, completed=True)

        _display_indicators(indicators, recon_config)

        if outcome is not None:
            _display_outcome(outcome)

        if json_output:
            result = outcome.to_dict() if outcome is not None else indicators.to_dict()
            json_output.parent.mkdir(parents=True, exist_ok=True)
            json_output.write_text(
                json.dumps(result, indent=2, ensure_ascii=False), encoding="utf-8"
            )
            console.print(f"[green]JSON written: {json_output}[/green]")

        if dry_run:
            console.print("\n[yellow]Dry run - no report generated[/yellow]")
            return

        report_generator = EvidenceReportGenerator(recon_config)
        if output is None:
            output = report_generator.default_output_path(vendor)
        report_path = report_generator.generate_report(indicators, output)

        console.print(f"\n[green]Report generated: {report_path}[/green]")

    except Exception as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        if verbose:
            console.print_exception()
        sys.exit(1)


@main.command("check-vendor")
@click.argument("vendor")
@click.argument("text_file", type=click.Path(exists=True, path_type=Path))
@click.option("-c", "--config", type=click.Path(exists=True, path_type=Path))
def check_vendor(vendor: str, text_file: Path, config: Optional[Path]):
    """
    Check whether a vendor appears in an extracted report text.

    Exits with status 1 when the vendor is not found.
    """
    try:
        recon_config = load_config(config)
        document = SourceReader(recon_config).read(text_file.stem, text_file)
        found = VendorMatcher(recon_config.matching).is_present(vendor, document.text)
    except Exception as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)

    if found:
        console.print(f"[green]Vendor '{vendor}' found in {text_file.name}[/green]")
    else:
        console.print(f"[red]Vendor '{vendor}' not found in {text_file.name}[/red]")
        sys.exit(1)


@main.command("extract-lines")
@click.argument("vendor")
@click.argument("text_file", type=click.Path(exists=True, path_type=Path))
@click.option("-c", "--config", type=click.Path(exists=True, path_type=Path))
def extract_lines(vendor: str, text_file: Path, config: Optional[Path]):
    """
    List the lines of an extracted report text that mention a vendor.
    """
    try:
        recon_config = load_config(config)
        document = SourceReader(recon_config).read(text_file.stem, text_file)
        matches = LineExtractor(recon_config.matching).extract(document.text, vendor)
    except Exception as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)

    table = Table(title=f"Vendor Lines: {text_file.name}")
    table.add_column("Score", justify="right")
    table.add_column("Line")
    table.add_column("Values")
    table.add_column("Last Value", justify="right")

    for match in matches:
        table.add_row(
            f"{match.score:.2f}",
            match.original_line[:80] + "..." if len(match.original_line) > 80 else match.original_line,
            ", ".join(match.monetary_values) or "-",
            match.last_value or "-",
        )

    console.print(table)
    console.print(f"\nTotal lines: {len(matches)}")


@main.command("init-config")
@click.option(
    "-o", "--output", type=click.Path(path_type=Path), default=Path("config.yaml")
)
def init_config(output: Path):
    """Generate a sample configuration file."""
    generate_default_config(output)
    console.print(f"[green]Configuration file generated: {output}[/green]")


def _display_indicators(indicators: VendorIndicators, config: ReconConfig) -> None:
    """Display vendor evidence and the verdict in the console."""
    table = Table(title=f"Vendor Evidence: {indicators.vendor}")
    table.add_column("Source", style="cyan")
    table.add_column("Lines", justify="right")
    table.add_column("Balances", justify="right")

    for source, indicator in indicators.indicators_by_source.items():
        table.add_row(
            config.sources.label_for(source),
            str(len(indicator.line_matches)),
            ", ".join(b.raw for b in indicator.parsed_balances) or "-",
        )

    console.print(table)

    assessment = indicators.assessment
    style = VERDICT_STYLES[assessment.verdict]
    console.print(f"\nVerdict: [{style}]{assessment.verdict.value}[/{style}]")
    console.print(assessment.description)
    if assessment.reference_value is not None:
        console.print(f"Reference value: {assessment.reference_value:,.2f}")
    if assessment.spread is not None:
        console.print(f"Spread: {assessment.spread:,.2f}")


def _display_outcome(outcome) -> None:
    """Display the reasoning step result."""
    console.print(f"\nAnalysis status: [bold]{outcome.status.value}[/bold]")
    if outcome.message:
        console.print(outcome.message)
    if outcome.detail:
        console.print(f"[red]{outcome.detail}[/red]")

    if outcome.diagnosis is not None:
        console.print_json(data=outcome.diagnosis)
    elif outcome.status == AnalysisStatus.DIAGNOSIS_TEXT and outcome.raw_response:
        console.print(outcome.raw_response)


def _apply_overrides(
    config: ReconConfig,
    presence_threshold: Optional[float],
    extraction_threshold: Optional[float],
    tolerance: Optional[float],
) -> None:
    """Apply command-line threshold and tolerance overrides."""
    if presence_threshold is not None:
        config.matching.presence_threshold = presence_threshold
    if extraction_threshold is not None:
        config.matching.extraction_threshold = extraction_threshold
    if tolerance is not None:
        config.balance.equality_tolerance = tolerance


if __name__ == "__main__":
    main()
