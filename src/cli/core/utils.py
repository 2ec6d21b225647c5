"""Shared helpers for CLI commands."""

from typing import List, Optional


EXIT_SUCCESS = 0
EXIT_CONNECTION_ERROR = 1
EXIT_ERROR = 2


def parse_comma_list(value: Optional[str]) -> List[str]:
    """
    Parse a comma-separated string into a list of unique values.

    Whitespace around values is stripped, empty values are dropped and
    the first occurrence of a repeated value wins.
    """
    if not value:
        return []

    values = []
    for item in value.split(','):
        item = item.strip()
        if item and item not in values:
            values.append(item)
    return values
