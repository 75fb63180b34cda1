"""
CSV Utilities

Common functions for reading and writing CSV files with proper configuration.
Rows are plain dictionaries keyed by column title; header order is preserved.
"""

import csv
from pathlib import Path
from typing import Dict, List, Optional, Tuple


def configure_csv(field_size_limit: int = 10 * 1024 * 1024) -> None:
    """
    Configure CSV module for large fields.

    Args:
        field_size_limit: Maximum field size in bytes (default: 10MB)
    """
    csv.field_size_limit(field_size_limit)


def read_table(
    file_path: str | Path,
    encoding: str = 'utf-8-sig'
) -> Tuple[List[str], List[Dict[str, str]]]:
    """
    Read a whole CSV file, keeping its header order.

    Spreadsheet exports often carry a BOM, so the default encoding strips it.
    Missing trailing cells are normalized to empty strings.

    Args:
        file_path: Path to CSV file
        encoding: File encoding

    Returns:
        (fieldnames, rows) tuple
    """
    with open(file_path, 'r', encoding=encoding, newline='') as f:
        reader = csv.DictReader(f)
        fieldnames = list(reader.fieldnames or [])
        rows = []
        for row in reader:
            row.pop(None, None)  # overflow cells beyond the header
            rows.append({key: (value or '') for key, value in row.items()})
    return fieldnames, rows


def write_csv(
    file_path: str | Path,
    rows: List[Dict[str, str]],
    fieldnames: Optional[List[str]] = None,
    encoding: str = 'utf-8'
) -> int:
    """
    Write rows to CSV file.

    The header row is always written when fieldnames are given, even for an
    empty table.

    Args:
        file_path: Path to output CSV file
        rows: List of dictionaries to write
        fieldnames: Column names (if None, uses keys from first row)
        encoding: File encoding (default: utf-8)

    Returns:
        Number of rows written
    """
    if fieldnames is None:
        if not rows:
            return 0
        fieldnames = list(rows[0].keys())

    with open(file_path, 'w', encoding=encoding, newline='') as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames, extrasaction='ignore')
        writer.writeheader()
        writer.writerows(rows)

    return len(rows)


def next_available_path(directory: str | Path, base_name: str, suffix: str = '.csv') -> Path:
    """
    Find the first unused name in the sequence base, base1, base2, ...

    Args:
        directory: Directory the file will be written to
        base_name: File name without suffix (e.g., "template_listingsData")
        suffix: File extension including the dot

    Returns:
        Path that does not exist yet

    Example:
        With base.csv and base1.csv on disk, returns base2.csv
    """
    directory = Path(directory)
    counter = 0
    while True:
        name = f"{base_name}{counter or ''}{suffix}"
        candidate = directory / name
        if not candidate.exists():
            return candidate
        counter += 1


# Initialize CSV configuration on module import
configure_csv()
