"""CSV reading and cell parsing shared by the loaders.

Cells are read as literal text and converted here so that one policy
decides what happens to malformed values: lenient mode turns them into 0,
strict mode raises ValueError.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

logger = logging.getLogger(__name__)


def read_raw_csv(path: Path | str) -> pd.DataFrame:
    """Read a CSV as text cells with positional columns.

    The header row is kept as row 0 so that repeated header names are
    preserved verbatim. Empty cells arrive as "".

    Args:
        path: CSV file path.

    Returns:
        DataFrame of strings with integer column labels; empty if the file
        has no content.

    Raises:
        OSError: If the file cannot be opened.
        pandas.errors.ParserError: If the file is not valid CSV.
    """
    try:
        frame = pd.read_csv(path, header=None, dtype=str, na_filter=False)
    except pd.errors.EmptyDataError:
        logger.warning("%s: empty file", path)
        return pd.DataFrame()
    # Short rows are padded with NaN even with na_filter off.
    return frame.fillna("")


def parse_float(text: str, *, strict: bool, where: str = "") -> float:
    """Parse a numeric cell.

    Args:
        text: Cell text.
        strict: Raise instead of defaulting to 0.0.
        where: Location description used in log and error messages.

    Returns:
        Parsed value, or 0.0 if malformed in lenient mode.

    Raises:
        ValueError: If malformed in strict mode.
    """
    try:
        return float(text)
    except ValueError:
        if strict:
            raise ValueError(f"{where}: cannot parse {text!r} as a number") from None
        logger.debug("%s: unparseable %r, using 0.0", where, text)
        return 0.0


def parse_int(text: str, *, strict: bool, where: str = "") -> int:
    """Parse a year or month field, defaulting to 0 when lenient."""
    try:
        return int(text)
    except ValueError:
        if strict:
            raise ValueError(f"{where}: cannot parse {text!r} as an integer") from None
        logger.debug("%s: unparseable %r, using 0", where, text)
        return 0


def safe_ratio(numerator: float, denominator: float) -> float:
    """Divide, returning 0.0 when the denominator is zero."""
    if denominator == 0:
        return 0.0
    return numerator / denominator
