"""Tests for the top-level progress provider."""

import pytest
from unittest.mock import Mock, call

from progress_provider.base import ObjectProgressReportFactory, TextProgressReportFactory
from progress_provider.config import Config
from progress_provider.core import ProgressProvider
from progress_provider.foundations.types import ProgressReport, ProgressState


class TestProgressProviderState:
    """Test derived properties of the provider."""

    def test_initial_state(self, provider):
        assert provider.is_operation_in_progress is False
        assert provider.is_ui_blocked is False
        assert provider.status is None
        assert provider.active_child_operations == []

    def test_create_progress_reports_initial_status(self, provider):
        progress = provider.create_progress()

        assert provider.is_operation_in_progress is True
        assert progress.last_reported_status == ProgressReport("", state=ProgressState.INDETERMINATE)
        assert provider.status.state is ProgressState.INDETERMINATE
        assert provider.status.progress_value is None
        assert provider.active_child_operations == [progress]

    def test_in_progress_follows_active_children(self, provider):
        first = provider.create_progress()
        second = provider.create_progress()

        steps = [
            lambda: first.report(ProgressReport("a", 0.5, 1.0)),
            lambda: second.report(ProgressReport("b", 0.2, 1.0)),
            first.report_completed,
            lambda: second.report(ProgressReport("b", 0.8, 1.0)),
            second.dispose,
        ]
        for step in steps:
            step()
            assert provider.is_operation_in_progress == bool(provider.active_child_nodes)

        assert provider.is_operation_in_progress is False
        assert provider.status is None

    def test_weighted_status(self, provider):
        first = provider.create_progress()
        second = provider.create_progress()

        first.report(ProgressReport("first", 0.5, 1.0))
        second.report(ProgressReport("second", 1.0, 1.0))
        second.report_completed()

        assert provider.status.progress_value == pytest.approx(0.75)
        assert provider.status.message == "first"

    def test_error_escalates_status(self, provider):
        first = provider.create_progress()
        second = provider.create_progress()

        first.report(ProgressReport("fine", 0.3, 1.0))
        second.report(ProgressReport("broken", 0.1, 1.0, ProgressState.ERROR))

        assert provider.status.state is ProgressState.ERROR

    def test_nested_operations_roll_up(self, provider):
        outer = provider.create_progress()
        inner_a = outer.create_progress()
        inner_b = outer.create_progress()

        inner_a.report(ProgressReport("download", 1, 2))
        inner_b.report(ProgressReport("extract", 0, 2))

        assert provider.status.progress_value == pytest.approx(0.25)
        assert provider.status.message == "extract"

    def test_dispose_resets_provider(self, provider, navigation_service):
        provider.create_progress(blocks_ui=True)

        provider.dispose()

        assert provider.is_operation_in_progress is False
        assert provider.is_ui_blocked is False
        assert navigation_service.enable.call_args_list == [call(False), call(True)]


class TestUiBlocking:
    """Test UI blocking and navigation debounce."""

    def test_blocking_operation_disables_navigation(self, provider, navigation_service):
        provider.create_progress(blocks_ui=True)

        assert provider.is_ui_blocked is True
        navigation_service.enable.assert_called_once_with(False)

    def test_non_blocking_operation_leaves_navigation(self, provider, navigation_service):
        provider.create_progress(blocks_ui=False)

        assert provider.is_ui_blocked is False
        navigation_service.enable.assert_not_called()

    def test_repeated_reports_call_navigation_once(self, provider, navigation_service):
        progress = provider.create_progress(blocks_ui=True)

        progress.report(ProgressReport("one", 1, 3))
        progress.report(ProgressReport("two", 2, 3))
        progress.report(ProgressReport("three", 3, 3))

        navigation_service.enable.assert_called_once_with(False)

    def test_completion_enables_navigation(self, provider, navigation_service):
        progress = provider.create_progress(blocks_ui=True)

        progress.dispose()

        assert navigation_service.enable.call_args_list == [call(False), call(True)]

    def test_blocking_stays_while_any_blocker_active(self, provider, navigation_service):
        blocker_a = provider.create_progress(blocks_ui=True)
        blocker_b = provider.create_progress(blocks_ui=True)

        blocker_a.dispose()
        assert provider.is_ui_blocked is True

        blocker_b.dispose()
        assert provider.is_ui_blocked is False
        assert navigation_service.enable.call_args_list == [call(False), call(True)]

    def test_nested_blocking_child(self, provider, navigation_service):
        outer = provider.create_progress(blocks_ui=False)
        inner = outer.create_progress(blocks_ui=True)

        inner.report(ProgressReport("modal step"))
        assert provider.is_ui_blocked is True

        inner.dispose()

        assert provider.is_ui_blocked is False
        assert provider.is_operation_in_progress is True
        assert navigation_service.enable.call_args_list == [call(False), call(True)]

    def test_failed_enable_is_retried(self, provider, navigation_service):
        navigation_service.enable.side_effect = [RuntimeError("navigation unavailable"), None, None]

        with pytest.raises(RuntimeError):
            provider.create_progress(blocks_ui=True)
        progress = provider.active_child_operations[0]
        progress.report(ProgressReport("retry"))

        assert navigation_service.enable.call_args_list == [call(False), call(False)]

        progress.dispose()
        assert navigation_service.enable.call_args_list[-1] == call(True)


class TestPropertyChanged:
    """Test property change notifications."""

    def test_notifies_changed_properties(self, provider):
        handler = Mock()
        provider.subscribe(handler)

        provider.create_progress()

        names = [c.args[1] for c in handler.call_args_list]
        assert names == ['is_operation_in_progress', 'status']
        assert handler.call_args_list[0].args[0] is provider

    def test_unchanged_values_do_not_notify(self, provider):
        progress = provider.create_progress()
        progress.report(ProgressReport("same", 1, 2))
        handler = Mock()
        provider.subscribe(handler)

        progress.report(ProgressReport("same", 1, 2))

        handler.assert_not_called()

    def test_blocked_change_is_notified(self, provider):
        handler = Mock()
        provider.subscribe(handler)

        provider.create_progress(blocks_ui=True)

        names = [c.args[1] for c in handler.call_args_list]
        assert 'is_ui_blocked' in names

    def test_failing_handler_does_not_stop_others(self, provider):
        failing = Mock(side_effect=RuntimeError("handler failed"))
        working = Mock()
        provider.subscribe(failing)
        provider.subscribe(working)

        provider.create_progress()

        assert working.call_count == failing.call_count == 2

    def test_unsubscribe(self, provider):
        handler = Mock()
        provider.subscribe(handler)
        provider.unsubscribe(handler)
        provider.unsubscribe(handler)

        provider.create_progress()

        handler.assert_not_called()


class TestProviderConfiguration:
    """Test configuration-driven defaults."""

    def test_defaults_from_config(self, test_config):
        provider = ProgressProvider(config=test_config)

        assert provider.keep_progress_list_ordered is False
        assert provider.keep_child_list_ordered is True
        assert isinstance(provider.report_factory, TextProgressReportFactory)

    def test_object_message_type(self, tmp_path):
        config_file = tmp_path / 'progress_provider.yml'
        config_file.write_text("progress:\n  message_type: object\n  keep_root_list_ordered: true\n")

        provider = ProgressProvider(config=Config(config_file))
        progress = provider.create_progress()

        assert type(provider.report_factory) is ObjectProgressReportFactory
        assert provider.keep_progress_list_ordered is True
        assert progress.last_reported_status.message is None

    def test_explicit_arguments_win(self, test_config):
        factory = ObjectProgressReportFactory()
        provider = ProgressProvider(keep_progress_list_ordered=True, report_factory=factory, config=test_config)

        assert provider.keep_progress_list_ordered is True
        assert provider.report_factory is factory

    def test_child_ordering_from_config(self, tmp_path):
        config_file = tmp_path / 'progress_provider.yml'
        config_file.write_text("progress:\n  keep_child_list_ordered: false\n")

        provider = ProgressProvider(config=Config(config_file))
        progress = provider.create_progress()

        assert progress.keep_progress_list_ordered is False
