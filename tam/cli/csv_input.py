"""
CSV input for the CLI
Parse bars (high, low, close) or x/y pairs from CSV files with a header row
"""
import csv
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

from tam.indicators import BarData
from tam.logger import logger


def _read_rows(file_path: str, columns: Sequence[str]) -> List[Dict[str, float]]:
    """
    Read the named float columns from every row of a CSV file.

    Header names are matched case-insensitively; rows with missing or
    unparsable values are skipped and reported in the log.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the header lacks a required column
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"CSV file not found: {file_path}")

    rows = []
    errors = []

    with open(path, "r", newline="") as f:
        reader = csv.DictReader(f)
        header = {name.strip().lower(): name for name in (reader.fieldnames or [])}

        missing = [column for column in columns if column not in header]
        if missing:
            raise ValueError(f"CSV file {file_path} is missing columns: {', '.join(missing)}")

        for row_num, row in enumerate(reader, start=2):
            try:
                rows.append({column: float(row[header[column]]) for column in columns})
            except (TypeError, ValueError) as e:
                errors.append(f"Row {row_num}: Parse error - {e}")

    logger.info(f"Parsed CSV: {len(rows)} valid rows, {len(errors)} errors")

    if errors:
        logger.warning("CSV parse errors:\n" + "\n".join(errors[:10]))  # Log first 10 errors

    return rows


def read_bars(file_path: str) -> List[BarData]:
    """Parse a CSV with high, low and close columns into bars."""
    return [
        BarData(high=row["high"], low=row["low"], close=row["close"])
        for row in _read_rows(file_path, ("high", "low", "close"))
    ]


def read_pairs(file_path: str) -> List[Tuple[float, float]]:
    """Parse a CSV with x and y columns into pairs."""
    return [(row["x"], row["y"]) for row in _read_rows(file_path, ("x", "y"))]
