"""
filters/
--------
Column filter panel state.

    from filters import FilterSelection, COMMITTED_COLUMNS, COLUMN_OPTIONS
"""

from filters.columns   import COLUMN_OPTIONS, DEFAULT_COLUMNS
from filters.selection import (
    FilterSelection,
    CommittedColumns,
    COMMITTED_COLUMNS,
    FilterError,
    InvalidColumn,
)

__all__ = [
    "COLUMN_OPTIONS",
    "DEFAULT_COLUMNS",
    "FilterSelection",
    "CommittedColumns",
    "COMMITTED_COLUMNS",
    "FilterError",
    "InvalidColumn",
]
