"""Utility helper functions for the Odin web application."""

from typing import List, Optional


def split_columns(value: Optional[str]) -> List[str]:
    """
    Parse a comma-separated column list into an ordered list.

    Args:
        value: Comma-separated column names (e.g., "name, population,area")

    Returns:
        List of trimmed column names, in the order given
    """
    if not value:
        return []
    return [column.strip() for column in value.split(',') if column.strip()]


def join_columns(columns: List[str]) -> str:
    return ','.join(columns)
