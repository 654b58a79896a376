"""
Unit tests for the column filter state machine.

Ensures that:
1. Checkboxes start unchecked and follow toggle / select_all / reset_all.
2. Bulk transitions are observed as a single, complete state change.
3. commit() publishes checked columns in catalog order without duplicates,
   and reset_all() never touches the committed list.
"""

import pytest

from filters import (
    COLUMN_OPTIONS,
    DEFAULT_COLUMNS,
    COMMITTED_COLUMNS,
    CommittedColumns,
    FilterSelection,
    InvalidColumn,
)


@pytest.fixture
def committed():
    return CommittedColumns()


@pytest.fixture
def selection(committed):
    return FilterSelection(committed=committed)


class TestCatalog:
    def test_catalog_is_unique_and_ordered(self):
        assert len(COLUMN_OPTIONS) == len(set(COLUMN_OPTIONS)) == 23
        assert COLUMN_OPTIONS[0] == "Access modes"
        assert COLUMN_OPTIONS.index("Serial") < COLUMN_OPTIONS.index("Vendor")

    def test_process_wide_list_seeded_without_duplicates(self):
        assert len(COMMITTED_COLUMNS) == len(set(DEFAULT_COLUMNS))
        assert "docker_container_networks" in COMMITTED_COLUMNS


class TestCommittedColumns:
    def test_add_is_idempotent(self, committed):
        assert committed.add("Vendor")
        assert not committed.add("Vendor")
        assert committed.as_list() == ["Vendor"]

    def test_discard_by_key(self, committed):
        committed.replace(["Serial", "Vendor", "Model"])
        assert committed.discard("Vendor")
        assert not committed.discard("Vendor")
        assert committed.as_list() == ["Serial", "Model"]

    def test_seed_dedupes_keeping_first_position(self):
        assert CommittedColumns(["a", "b", "a"]).as_list() == ["a", "b"]


class TestInitialState:
    def test_everything_unchecked(self, selection):
        assert all(not selection.is_selected(c) for c in COLUMN_OPTIONS)
        assert selection.selected() == []
        assert set(selection.snapshot()) == set(COLUMN_OPTIONS)

    def test_defaults_to_process_wide_list(self):
        assert FilterSelection().committed is COMMITTED_COLUMNS

    def test_restore_from_dict(self, committed):
        restored = FilterSelection.from_dict({"Vendor": True}, committed=committed)
        assert restored.is_selected("Vendor")
        assert restored.selected() == ["Vendor"]

    def test_restore_rejects_unknown_columns(self, committed):
        with pytest.raises(InvalidColumn):
            FilterSelection.from_dict({"Bogus": True}, committed=committed)


class TestToggle:
    def test_flips_only_that_column(self, selection):
        assert selection.toggle("Vendor") is True
        assert selection.is_selected("Vendor")
        assert selection.selected() == ["Vendor"]

    def test_double_toggle_restores(self, selection):
        selection.toggle("Serial")
        before = selection.snapshot()
        selection.toggle("Vendor")
        selection.toggle("Vendor")
        assert selection.snapshot() == before

    def test_unknown_column_rejected(self, selection):
        selection.toggle("Model")
        before = selection.snapshot()
        with pytest.raises(InvalidColumn) as exc:
            selection.toggle("NotARealColumn")
        assert exc.value.column == "NotARealColumn"
        assert selection.snapshot() == before
        assert "NotARealColumn" not in selection.snapshot()

    def test_invalid_column_is_key_error(self, selection):
        with pytest.raises(KeyError):
            selection.is_selected("NotARealColumn")


class TestBulkTransitions:
    def test_select_all(self, selection):
        selection.toggle("Vendor")
        selection.select_all()
        assert all(selection.is_selected(c) for c in COLUMN_OPTIONS)

    def test_select_all_notifies_once_with_full_state(self, selection):
        seen = []
        selection.subscribe(seen.append)
        selection.select_all()
        assert len(seen) == 1
        assert all(seen[0][c] for c in COLUMN_OPTIONS)

    def test_reset_all_notifies_once_with_full_state(self, selection):
        selection.select_all()
        seen = []
        selection.subscribe(seen.append)
        selection.reset_all()
        assert len(seen) == 1
        assert not any(seen[0].values())

    def test_snapshot_handed_to_observers_is_a_copy(self, selection):
        seen = []
        selection.subscribe(seen.append)
        selection.toggle("Vendor")
        seen[0]["Vendor"] = False
        assert selection.is_selected("Vendor")

    def test_failing_observer_does_not_starve_the_rest(self, selection):
        seen = []

        def broken(snapshot):
            raise RuntimeError("boom")

        selection.subscribe(broken)
        selection.subscribe(seen.append)
        with pytest.raises(RuntimeError, match="boom"):
            selection.select_all()
        assert len(seen) == 1
        assert all(seen[0].values())
        assert all(selection.is_selected(c) for c in COLUMN_OPTIONS)

    def test_unsubscribe(self, selection):
        seen = []
        selection.subscribe(seen.append)
        selection.unsubscribe(seen.append)
        selection.toggle("Vendor")
        assert seen == []

    def test_reset_all_leaves_committed_list_alone(self, selection, committed):
        committed.replace(["PID", "Vendor"])
        selection.toggle("Vendor")
        selection.reset_all()
        assert not any(selection.snapshot().values())
        assert committed.as_list() == ["PID", "Vendor"]


class TestCommit:
    def test_commit_in_catalog_order(self, selection, committed):
        selection.toggle("Vendor")
        selection.toggle("Serial")
        assert selection.commit() == ["Serial", "Vendor"]
        assert committed.as_list() == ["Serial", "Vendor"]

    def test_commit_twice_has_no_duplicates(self, selection, committed):
        selection.toggle("Vendor")
        selection.toggle("Serial")
        selection.commit()
        assert selection.commit() == []
        assert committed.as_list() == ["Serial", "Vendor"]

    def test_commit_appends_after_existing(self, selection, committed):
        committed.replace(["PID", "Serial"])
        selection.toggle("Vendor")
        selection.toggle("Serial")
        assert selection.commit() == ["Vendor"]
        assert committed.as_list() == ["PID", "Serial", "Vendor"]

    def test_empty_commit_is_noop(self, selection, committed):
        assert selection.commit() == []
        assert len(committed) == 0

    def test_commit_keeps_checkboxes(self, selection):
        selection.toggle("Model")
        selection.commit()
        assert selection.is_selected("Model")

    def test_commit_after_reset_adds_nothing(self, selection, committed):
        selection.select_all()
        selection.reset_all()
        assert selection.commit() == []
        assert committed.as_list() == []

    def test_withdraw(self, selection, committed):
        selection.select_all()
        selection.commit()
        assert selection.withdraw("Vendor")
        assert not selection.withdraw("Vendor")
        assert "Vendor" not in committed
        assert len(committed) == len(COLUMN_OPTIONS) - 1

    def test_withdraw_unknown_column(self, selection):
        with pytest.raises(InvalidColumn):
            selection.withdraw("NotARealColumn")

    def test_panels_share_a_committed_list(self, committed):
        first = FilterSelection(committed=committed)
        second = FilterSelection(committed=committed)
        first.toggle("Iqn")
        first.commit()
        second.toggle("Iqn")
        second.toggle("Model")
        assert second.commit() == ["Model"]
        assert committed.as_list() == ["Iqn", "Model"]
