"""CLI entry point for form filler application."""
import json
import sys
from typing import List, Optional

from form_filler.config import config, configure_logging
from form_filler.domain.exceptions import FormFillerError
from form_filler.domain.models import ApplicationReport, BatchResult
from form_filler.services.data_loader import load_value_map, sample_value_map, write_sample_data
from form_filler.services.processor import FormProcessor

USAGE = """
Usage:
  List form fields:  form-filler list <inputPdf>            (or -l <inputPdf>)
  Fill form:         form-filler fill <inputPdf> <outputPdf> [dataFile]
  Single file:       form-filler -s <inputPdf> <outputPdf> <dataFile> [flatten]
  Batch mode:        form-filler -b <inputDirectory> <outputDirectory> <dataFile> [flatten]
  Convert only:      form-filler convert <inputPdf> <outputPdf>
                     form-filler convert -b <inputDirectory> <outputDirectory>
  Sample data:       form-filler sample-data <output.json>

  dataFile: JSON object or Excel sheet (first row field names, second row values)
  flatten:  Use 'true' to make form non-editable after filling

Environment variables:
  DEBUG=true          Show detailed debugging information
  FLATTEN=true        Make form non-editable after filling
  PDFREST_API_KEY     API key for XFA to AcroForm conversion
"""


def _flatten_requested(args: List[str], index: int) -> bool:
    if len(args) > index:
        return args[index] == "true"
    return config.processing.flatten


def print_report(report: ApplicationReport) -> None:
    print("\nSummary:")
    print(f"  Fields attempted: {report.total_attempted}")
    print(f"  Fields filled: {report.applied_count}")
    print(f"  Fields skipped: {len(report.skipped)}")

    if report.skipped:
        print("\nSkipped fields:")
        for outcome in report.skipped:
            print(f"  - {outcome.name}: {outcome.reason}")


def print_batch(result: BatchResult) -> None:
    print("\nBatch summary:")
    print(f"  Documents processed: {result.processed_count}")
    print(f"  Documents failed: {result.failed_count}")
    for path, error in result.failures.items():
        print(f"  - {path}: {error}")


def list_command(processor: FormProcessor, input_file: str) -> None:
    fields, template = processor.list_fields(input_file)
    print("Form Fields:")
    for form_field in fields:
        print(f"- {form_field['name']} ({form_field['kind']})")

    print("\nExample JSON template:")
    print(json.dumps(template, indent=2))


def fill_command(processor: FormProcessor, args: List[str]) -> None:
    input_file, output_file = args[0], args[1]
    if len(args) > 2:
        values = load_value_map(args[2])
    else:
        values = sample_value_map()
        print("Using example data (for Form 2848). For actual use, provide a JSON file with your data.")

    print(f"Filling form: {input_file}")
    report = processor.fill_file(input_file, output_file, values, config.processing.flatten)
    print_report(report)
    print(f"\n✓ Filled PDF saved to: {output_file}")


def single_command(processor: FormProcessor, args: List[str]) -> None:
    input_file, output_file, data_file = args[0], args[1], args[2]
    values = load_value_map(data_file)
    flatten = _flatten_requested(args, 3)

    print(f"Converting and filling: {input_file}")
    report = processor.convert_and_fill(input_file, output_file, values, flatten)
    print_report(report)
    print(f"\n✓ Form filled successfully! Final PDF saved to: {output_file}")


def batch_command(processor: FormProcessor, args: List[str]) -> None:
    input_dir, output_dir, data_file = args[0], args[1], args[2]
    values = load_value_map(data_file)
    flatten = _flatten_requested(args, 3)

    print(f"Batch converting and filling: {input_dir} -> {output_dir}")
    result = processor.batch_convert_and_fill(input_dir, output_dir, values, flatten)
    print_batch(result)


def convert_command(processor: FormProcessor, args: List[str]) -> None:
    if args[0] == "-b":
        print_batch(processor.batch_convert(args[1], args[2]))
        return
    processor.convert_file(args[0], args[1])
    print(f"✓ AcroForm PDF saved to: {args[1]}")


def main(argv: Optional[List[str]] = None, processor: Optional[FormProcessor] = None):
    """Main CLI function."""
    args = list(sys.argv[1:] if argv is None else argv)
    configure_logging(config.processing.debug)
    processor = processor or FormProcessor()

    if not args:
        print(USAGE)
        sys.exit(1)

    mode, rest = args[0], args[1:]
    try:
        if mode in ("list", "-l") and len(rest) >= 1:
            list_command(processor, rest[0])
        elif mode == "fill" and len(rest) >= 2:
            fill_command(processor, rest)
        elif mode == "-s" and len(rest) >= 3:
            single_command(processor, rest)
        elif mode == "-b" and len(rest) >= 3:
            batch_command(processor, rest)
        elif mode == "convert" and len(rest) >= 2 and (rest[0] != "-b" or len(rest) >= 3):
            convert_command(processor, rest)
        elif mode == "sample-data" and len(rest) >= 1:
            path = write_sample_data(rest[0])
            print(f"Created {path} with sample data")
        else:
            print("Invalid arguments.")
            print(USAGE)
            sys.exit(1)
    except FormFillerError as e:
        print(f"Error: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"Unexpected error: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
