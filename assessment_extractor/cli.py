"""CLI interface for assessment PDF extraction"""
import click
import json
import logging
from pathlib import Path
from typing import Dict
from .config import PRESELECT_THRESHOLD, configure_logging
from .errors import ExtractionError
from .extractor import AssessmentExtractor
from .import_selector import ImportSelector
import time
import traceback


def process_pdf_file(extractor: AssessmentExtractor,
                     selector: ImportSelector,
                     pdf_path: Path,
                     output_dir: Path = None,
                     verbose: bool = False) -> Dict:
    """Process a single PDF file"""
    try:
        with open(pdf_path, 'rb') as f:
            pdf_bytes = f.read()

        click.echo(f"Processing: {pdf_path.name}")

        start_ts = time.perf_counter()
        outcome = extractor.extract(pdf_bytes)
        elapsed_s = time.perf_counter() - start_ts

        record = outcome.to_dict()
        selection = selector.select(record)
        result = {"record": record, "selection": selection}

        # Save results if output directory specified
        if output_dir:
            output_path = output_dir / f"{pdf_path.stem}_assessment.json"
            with open(output_path, 'w', encoding='utf-8') as f:
                json.dump(result, f, indent=2, ensure_ascii=False)
            click.echo(f"  Results saved to: {output_path}")

        if outcome.failed:
            click.echo(f"  Extraction failed: {outcome.reason}", err=True)
        else:
            for section, decision in selection.items():
                marker = '*' if decision['preselected'] else ' '
                click.echo(f"  [{marker}] {section}: {decision['confidence']:.2f} ({decision['band']})")

        click.echo(f"  Time: {elapsed_s:.2f}s | Sections: {len(selection)}")

        return result

    except (OSError, ExtractionError) as e:
        click.echo(f"  Error processing {pdf_path.name}: {e}", err=True)
        if verbose:
            traceback.print_exc()
        return {}


@click.command()
@click.argument('pdf_folder', type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option('--output-dir', '-o',
              type=click.Path(file_okay=False, path_type=Path),
              help='Directory to save extraction results')
@click.option('--min-confidence', type=click.FloatRange(0.0, 1.0), default=PRESELECT_THRESHOLD,
              show_default=True,
              help='Section confidence at which a section is pre-selected for import')
@click.option('--verbose', '-v', is_flag=True,
              help='Verbose output')
def main(pdf_folder: Path, output_dir: Path, min_confidence: float, verbose: bool):
    """
    Extract structured assessment sections from clinical PDFs in a folder.

    PDF_FOLDER: Folder containing PDF files to process

    Examples:

    \b
    assessment-extract /path/to/reports --output-dir results
    assessment-extract /path/to/reports --min-confidence 0.8 -v
    """
    configure_logging(logging.DEBUG if verbose else None)

    extractor = AssessmentExtractor()
    selector = ImportSelector(threshold=min_confidence)

    # Create output directory if specified
    if output_dir:
        output_dir.mkdir(parents=True, exist_ok=True)

    # Get PDF files
    pdf_files = sorted(pdf_folder.glob('*.pdf'))
    if not pdf_files:
        click.echo(f"No PDF files found in {pdf_folder}", err=True)
        return

    click.echo(f"Found {len(pdf_files)} PDF file(s)")

    # Process each PDF
    all_results = {}
    for pdf_file in pdf_files:
        all_results[pdf_file.name] = process_pdf_file(
            extractor, selector, pdf_file, output_dir, verbose
        )

    # Summary
    succeeded = sum(
        1 for result in all_results.values()
        if result and not result['record'].get('_extractionFailed')
    )
    click.echo(f"\nProcessed {len(all_results)} PDF(s), {succeeded} with usable data")

    # Save combined results if output directory specified
    if output_dir and all_results:
        combined_path = output_dir / "all_results.json"
        with open(combined_path, 'w', encoding='utf-8') as f:
            json.dump(all_results, f, indent=2, ensure_ascii=False)
        click.echo(f"Combined results saved to: {combined_path}")


if __name__ == '__main__':
    main()
