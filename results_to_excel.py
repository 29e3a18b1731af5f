#!/usr/bin/env python3
"""Convert a results.json file to Excel (.xlsx) format."""

import sys
from pathlib import Path

# Ensure src is on path when run from project root
sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

from index_inspector.tools.storage_tool import export_excel, load_results


def results_to_excel(json_path: str, excel_path: str | None = None) -> None:
    """
    Convert a results JSON array to Excel format.

    Args:
        json_path: Path to results.json written by the pipeline
        excel_path: Path to output Excel file (default: same name with .xlsx extension)
    """
    json_file = Path(json_path)
    if not json_file.exists():
        print(f"ERROR: File not found: {json_path}")
        sys.exit(1)

    if excel_path is None:
        excel_path = json_file.with_suffix(".xlsx")

    try:
        records = load_results(json_file)
    except ValueError as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    if not records:
        print("ERROR: No records found in results file")
        sys.exit(1)

    out = export_excel(records, excel_path)
    print(f"✓ Converted {len(records)} records from {json_file.name} to {out.name}")
    print(f"  Output file: {out.absolute()}")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python results_to_excel.py <results.json> [output.xlsx]")
        print("\nExample:")
        print("  python results_to_excel.py output/results.json")
        print("  python results_to_excel.py output/results.json output/results.xlsx")
        sys.exit(1)

    input_file = sys.argv[1]
    output_file = sys.argv[2] if len(sys.argv) > 2 else None
    results_to_excel(input_file, output_file)
