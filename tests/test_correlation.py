import pytest

from vibepack.transform import ToolCorrelationTable


def test_record_and_pop_round_trip() -> None:
    table = ToolCorrelationTable()
    table.record("t1", 1000)

    assert "t1" in table
    assert table.get("t1") == 1000
    assert table.pop("t1") == 1000
    assert table.pop("t1") is None
    assert len(table) == 0


def test_rerecording_moves_entry_to_newest() -> None:
    table = ToolCorrelationTable(max_entries=2)
    table.record("a", 1)
    table.record("b", 2)
    table.record("a", 3)
    table.record("c", 4)

    assert "b" not in table
    assert table.get("a") == 3
    assert "c" in table


def test_entries_older_than_ttl_are_evicted_on_record() -> None:
    table = ToolCorrelationTable(ttl_ms=100)
    table.record("old", 1000)
    table.record("fresh", 1050)
    table.record("newest", 1150)

    assert "old" not in table
    assert "fresh" in table
    assert "newest" in table


def test_overflow_evicts_oldest_first() -> None:
    table = ToolCorrelationTable(max_entries=3)
    for index in range(5):
        table.record(f"t{index}", 1000 + index)

    assert len(table) == 3
    assert "t0" not in table
    assert "t1" not in table
    assert "t4" in table


def test_evict_reports_removed_count() -> None:
    table = ToolCorrelationTable(ttl_ms=10)
    table.record("a", 0)
    table.record("b", 5)

    assert table.evict(now=100) == 2
    assert len(table) == 0


def test_clear_removes_everything() -> None:
    table = ToolCorrelationTable()
    table.record("a", 1)
    table.record("b", 2)
    table.clear()

    assert len(table) == 0


@pytest.mark.parametrize("kwargs", [{"ttl_ms": 0}, {"max_entries": 0}, {"ttl_ms": -5}])
def test_non_positive_limits_are_rejected(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        ToolCorrelationTable(**kwargs)
