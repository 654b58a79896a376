"""
selection.py — Column Filter State
==================================
FilterSelection is the only object the filter panel talks to.  It owns
one checkbox per catalog column and publishes the chosen ones to a
shared CommittedColumns list when the user presses "Show".

State machine (per column):
    unchecked  →  toggle()      →  checked
    checked    →  toggle()      →  unchecked
    any        →  select_all()  →  checked
    any        →  reset_all()   →  unchecked

Transitions replace the whole checkbox mapping in one assignment, so an
observer sees either the old state or the new one, never a mix.  Only
commit() and withdraw() touch the committed list.

Thread safety:
  Neither class is thread-safe.  COMMITTED_COLUMNS is shared by every
  panel in the process; callers that open several panels must serialise
  access to it themselves.
"""

import logging
from typing import Callable, Dict, Iterable, Iterator, List, Mapping, Optional

from filters.columns import COLUMN_OPTIONS, DEFAULT_COLUMNS

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
class FilterError(Exception):
    """Base class for filter panel errors."""


class InvalidColumn(FilterError, KeyError):
    """Column name is not part of the catalog."""

    def __init__(self, column: str):
        super().__init__(column)
        self.column = column

    def __str__(self) -> str:
        return f"unknown column {self.column!r}"


# ---------------------------------------------------------------------------
# CommittedColumns — ordered, set-like, shared
# ---------------------------------------------------------------------------
class CommittedColumns:
    """
    Insertion-ordered collection of column names with idempotent
    add / discard by key.  Duplicates are never stored.
    """

    def __init__(self, columns: Iterable[str] = ()):
        self._columns: Dict[str, None] = dict.fromkeys(columns)

    def add(self, column: str) -> bool:
        """Append `column` if absent.  Returns True if it was added."""
        if column in self._columns:
            return False
        self._columns[column] = None
        return True

    def discard(self, column: str) -> bool:
        """Remove `column` if present.  Returns True if it was removed."""
        if column not in self._columns:
            return False
        del self._columns[column]
        return True

    def replace(self, columns: Iterable[str]) -> None:
        self._columns = dict.fromkeys(columns)

    def as_list(self) -> List[str]:
        return list(self._columns)

    def __contains__(self, column: object) -> bool:
        return column in self._columns

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._columns))

    def __len__(self) -> int:
        return len(self._columns)

    def __repr__(self) -> str:
        return f"CommittedColumns({self.as_list()!r})"


COMMITTED_COLUMNS = CommittedColumns(DEFAULT_COLUMNS)


# ---------------------------------------------------------------------------
# FilterSelection
# ---------------------------------------------------------------------------
class FilterSelection:
    """
    Attributes:
        committed : The CommittedColumns this panel publishes into.
                    Defaults to the process-wide COMMITTED_COLUMNS.
        columns   : The catalog, in display order.
    """

    def __init__(
        self,
        committed: Optional[CommittedColumns] = None,
        checkboxes: Optional[Mapping[str, bool]] = None,
        columns: Iterable[str] = COLUMN_OPTIONS,
    ):
        self.committed: CommittedColumns = committed if committed is not None else COMMITTED_COLUMNS
        self.columns:   tuple            = tuple(columns)
        self._observers: List[Callable[[Dict[str, bool]], None]] = []

        state = dict.fromkeys(self.columns, False)
        if checkboxes:
            for column, checked in checkboxes.items():
                self._require(column)
                state[column] = bool(checked)
        self._checkboxes: Dict[str, bool] = state

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------
    def subscribe(self, callback: Callable[[Dict[str, bool]], None]) -> None:
        """
        callback(snapshot) fires once per transition with the new state.

        The transition is applied before any callback runs.  Every callback
        is called even if an earlier one raises; the first error is
        re-raised once all of them have run.
        """
        self._observers.append(callback)

    def unsubscribe(self, callback: Callable[[Dict[str, bool]], None]) -> None:
        if callback in self._observers:
            self._observers.remove(callback)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def toggle(self, column: str) -> bool:
        """Flip one checkbox.  Returns its new value."""
        self._require(column)
        next_state = dict(self._checkboxes)
        next_state[column] = not next_state[column]
        self._apply(next_state)
        return next_state[column]

    def select_all(self) -> None:
        self._apply(dict.fromkeys(self.columns, True))

    def reset_all(self) -> None:
        """Uncheck every column.  The committed list is left alone."""
        self._apply(dict.fromkeys(self.columns, False))
        logger.info("filter selection reset")

    # ------------------------------------------------------------------
    # Committed list
    # ------------------------------------------------------------------
    def commit(self) -> List[str]:
        """
        Publish the checked columns, in catalog order, to the committed
        list.  Columns already committed are skipped.  Returns the ones
        added by this call; the checkboxes are not cleared.
        """
        snapshot = self._checkboxes
        added = [c for c in self.columns if snapshot[c] and self.committed.add(c)]
        if added:
            logger.info("committed %d column(s): %s", len(added), ", ".join(added))
        return added

    def withdraw(self, column: str) -> bool:
        """Remove one catalog column from the committed list."""
        self._require(column)
        return self.committed.discard(column)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    def is_selected(self, column: str) -> bool:
        self._require(column)
        return self._checkboxes[column]

    def selected(self) -> List[str]:
        return [c for c in self.columns if self._checkboxes[c]]

    def snapshot(self) -> Dict[str, bool]:
        return dict(self._checkboxes)

    # ------------------------------------------------------------------
    # Serialisation (session storage)
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, bool]:
        return self.snapshot()

    @classmethod
    def from_dict(
        cls,
        data: Optional[Mapping[str, bool]],
        committed: Optional[CommittedColumns] = None,
    ) -> "FilterSelection":
        return cls(committed=committed, checkboxes=data or {})

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _require(self, column: str) -> None:
        if column not in self.columns:
            raise InvalidColumn(column)

    def _apply(self, next_state: Dict[str, bool]) -> None:
        self._checkboxes = next_state
        first_error: Optional[Exception] = None
        for callback in list(self._observers):
            try:
                callback(dict(next_state))
            except Exception as e:
                logger.exception("filter observer %r failed", callback)
                if first_error is None:
                    first_error = e
        if first_error is not None:
            raise first_error

    def __repr__(self) -> str:
        return f"FilterSelection(selected={self.selected()!r})"
