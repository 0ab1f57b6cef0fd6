"""Unit tests for the severity model and level filtering."""

import pytest

from texdiag.contexts.diagnostics.log_item import LogItem
from texdiag.contexts.diagnostics.severity import LogLevel, filter_by_level


def _item(level: LogLevel) -> LogItem:
    return LogItem(level=level, message=level.value, raw=f"{level.value}\n")


@pytest.mark.unit
def test_levels_ordered_by_declaration():
    """Ordering follows declaration, not the alphabetical order of the values."""
    assert LogLevel.DEBUG < LogLevel.INFO < LogLevel.TYPESETTING < LogLevel.WARNING < LogLevel.ERROR
    # Alphabetically "error" < "info"; by severity it is the other way around
    assert LogLevel.ERROR > LogLevel.INFO
    assert sorted(LogLevel, reverse=True)[0] is LogLevel.ERROR


@pytest.mark.unit
def test_level_index():
    """index is the 0-based severity position."""
    assert [level.index for level in LogLevel] == [0, 1, 2, 3, 4]
    assert LogLevel.TYPESETTING.index == 2


@pytest.mark.unit
@pytest.mark.parametrize("name", ["warning", "WARNING", " Warning ", LogLevel.WARNING])
def test_from_name_accepts_values_and_names(name):
    assert LogLevel.from_name(name) is LogLevel.WARNING


@pytest.mark.unit
def test_from_name_rejects_unknown_level():
    with pytest.raises(ValueError, match="expected one of: debug, info, typesetting"):
        LogLevel.from_name("fatal")


@pytest.mark.unit
def test_comparison_with_other_types_is_unsupported():
    with pytest.raises(TypeError):
        LogLevel.ERROR > "info"


class TestFilterByLevel:
    """Tests for filter_by_level."""

    items = [_item(level) for level in [
        LogLevel.ERROR,
        LogLevel.DEBUG,
        LogLevel.TYPESETTING,
        LogLevel.WARNING,
        LogLevel.INFO,
        LogLevel.ERROR,
    ]]

    @pytest.mark.unit
    @pytest.mark.parametrize("min_level", list(LogLevel))
    def test_keeps_exactly_levels_at_or_above_threshold(self, min_level):
        kept = filter_by_level(self.items, min_level)

        assert kept == [item for item in self.items if item.level.index >= min_level.index]

    @pytest.mark.unit
    def test_preserves_log_order(self):
        kept = filter_by_level(self.items, LogLevel.TYPESETTING)

        assert [item.level for item in kept] == [
            LogLevel.ERROR,
            LogLevel.TYPESETTING,
            LogLevel.WARNING,
            LogLevel.ERROR,
        ]

    @pytest.mark.unit
    @pytest.mark.parametrize("min_level", list(LogLevel))
    def test_idempotent(self, min_level):
        once = filter_by_level(self.items, min_level)
        twice = filter_by_level(once, min_level)

        assert once == twice

    @pytest.mark.unit
    def test_none_keeps_everything(self):
        assert filter_by_level(self.items, None) == self.items

    @pytest.mark.unit
    def test_accepts_level_name(self):
        kept = filter_by_level(self.items, "error")

        assert len(kept) == 2
        assert all(item.level is LogLevel.ERROR for item in kept)
