"""Tests for progress value types."""

import math

import pytest

from progress_provider.foundations.types import (
    ProgressReport,
    ProgressState,
    InvalidProgressReportError,
    ProgressError,
    is_null_or_empty
)


class TestProgressState:
    """Test ordering of progress states."""

    def test_ordinal_order(self):
        assert ProgressState.NONE < ProgressState.INDETERMINATE < ProgressState.NORMAL < ProgressState.ERROR

    def test_max_escalates_to_error(self):
        states = [ProgressState.NORMAL, ProgressState.ERROR, ProgressState.INDETERMINATE]
        assert max(states) is ProgressState.ERROR


class TestProgressReport:
    """Test ProgressReport construction rules."""

    def test_default_is_indeterminate(self):
        report = ProgressReport()

        assert report.message is None
        assert report.progress_value is None
        assert report.state is ProgressState.INDETERMINATE
        assert not report.has_progress_value

    def test_message_only_is_indeterminate(self):
        report = ProgressReport("Loading")

        assert report.message == "Loading"
        assert report.state is ProgressState.INDETERMINATE

    def test_value_defaults_to_normal(self):
        report = ProgressReport("Copying", 3, 10)

        assert report.progress_value == 3.0
        assert report.progress_maximum_value == 10.0
        assert report.state is ProgressState.NORMAL
        assert report.fraction == pytest.approx(0.3)

    def test_explicit_state_is_kept(self):
        report = ProgressReport("Failed", 0.4, 1.0, ProgressState.ERROR)
        assert report.state is ProgressState.ERROR

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite_value_rejected(self, value):
        with pytest.raises(InvalidProgressReportError):
            ProgressReport("bad", value, 1.0)

    @pytest.mark.parametrize("maximum", [math.nan, math.inf])
    def test_non_finite_maximum_rejected(self, maximum):
        with pytest.raises(InvalidProgressReportError):
            ProgressReport("bad", 0.0, maximum)

    def test_invalid_report_error_is_value_error(self):
        with pytest.raises(ValueError):
            ProgressReport("bad", math.nan, 1.0)
        assert issubclass(InvalidProgressReportError, ProgressError)

    def test_reports_are_immutable(self):
        report = ProgressReport("msg", 1, 2)
        with pytest.raises(AttributeError):
            report.progress_value = 2

    def test_equality_by_value(self):
        assert ProgressReport("a", 0.4, 1.0, ProgressState.ERROR) == ProgressReport("a", 0.4, 1.0, ProgressState.ERROR)
        assert ProgressReport("a", 0.4, 1.0) != ProgressReport("b", 0.4, 1.0)

    def test_to_dict(self):
        data = ProgressReport("msg").to_dict()

        assert data == {
            'message': 'msg',
            'progress_value': None,
            'progress_maximum_value': None,
            'state': 'indeterminate',
        }


class TestIsNullOrEmpty:
    """Test message emptiness helper."""

    def test_empty_messages(self):
        assert is_null_or_empty(None)
        assert is_null_or_empty("")

    def test_non_empty_messages(self):
        assert not is_null_or_empty("x")
        assert not is_null_or_empty({'text': ''})
