"""Unit tests for severity levels."""

from callsite_log.levels import EMITTING_LEVELS, Level


class TestLevel:
    def test_ordering(self):
        assert Level.DEBUG < Level.INFO < Level.WARN < Level.ERROR < Level.FATAL < Level.OFF

    def test_from_name_exact(self):
        assert Level.from_name("WARN") is Level.WARN

    def test_from_name_case_insensitive(self):
        assert Level.from_name(" error ") is Level.ERROR

    def test_from_name_unknown(self):
        assert Level.from_name("BOGUS") is None
        assert Level.from_name("WARNING") is None

    def test_from_name_empty(self):
        assert Level.from_name("") is None
        assert Level.from_name(None) is None

    def test_label(self):
        assert Level.FATAL.label == "fatal"

    def test_emitting_levels_exclude_off(self):
        assert Level.OFF not in EMITTING_LEVELS
        assert len(EMITTING_LEVELS) == 5
