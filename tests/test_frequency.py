import pytest

from xtrace_collapse.core.frequency import FrequencyTable


class TestFrequencyTable:
    def test_same_path_accumulates(self):
        table = FrequencyTable()
        table.record("{main};a", 12.5)
        table.record("{main};a", 7.5)

        assert len(table) == 1
        assert table["{main};a"] == 20.0

    def test_distinct_paths(self):
        table = FrequencyTable()
        table.record("{main}", 3.0)
        table.record("{main};a", 1.0)

        assert "{main}" in table
        assert "{main};b" not in table
        assert table.get("{main};b") is None
        assert table.get("{main};b", 0.0) == 0.0

    def test_negative_duration_is_recorded(self):
        table = FrequencyTable()
        table.record("a", 5.0)
        table.record("a", -2.0)

        assert table["a"] == 3.0

    def test_finalize(self):
        table = FrequencyTable()
        table.record("a", 1.0)
        table.record("a;b", 2.0)

        assert dict(table.finalize()) == {"a": 1.0, "a;b": 2.0}

    def test_finalize_only_once(self):
        table = FrequencyTable()
        table.finalize()

        with pytest.raises(RuntimeError):
            table.finalize()
        with pytest.raises(RuntimeError):
            table.record("a", 1.0)
