"""Tests for the diff session state holder."""

from unittest.mock import Mock

import pytest

from split_diff.utils.change_navigator import NO_SELECTION
from split_diff.utils.diff_engine import compute_diff
from split_diff.utils.pane_sync import LEFT, RIGHT
from split_diff.utils.session import STATUS_CHANGED, STATUS_IDENTICAL, STATUS_IDLE, DiffSession


@pytest.fixture
def live_session(fake_clock):
    on_result = Mock()
    session = DiffSession(live=True, debounce_ms=400, context_lines=3, timer=fake_clock.timer, on_result=on_result)
    return session, on_result


@pytest.fixture
def manual_session(fake_clock):
    on_result = Mock()
    session = DiffSession(live=False, debounce_ms=400, context_lines=3, timer=fake_clock.timer, on_result=on_result)
    return session, on_result


class TestLiveMode:
    """Edits are debounced into one recompute against the latest content."""

    def test_edit_schedules_recompute(self, live_session, fake_clock):
        session, on_result = live_session
        assert session.edit(LEFT, "a\nb\n") is True
        assert session.pending
        assert session.result is None

        fake_clock.advance_to(400)
        assert not session.pending
        assert session.status == STATUS_CHANGED
        on_result.assert_called_once_with(session.result)

    def test_burst_uses_latest_text(self, live_session, fake_clock):
        session, on_result = live_session
        session.edit(RIGHT, "x\n")
        fake_clock.advance_to(100)
        session.edit(RIGHT, "x\ny\n")
        fake_clock.advance_to(200)
        session.edit(LEFT, "x\ny\n")
        fake_clock.advance_to(600)
        assert on_result.call_count == 1
        assert session.status == STATUS_IDENTICAL

    def test_echo_does_not_schedule(self, live_session):
        session, _ = live_session
        session.load(LEFT, "loaded")
        session.flush()
        assert session.edit(LEFT, "loaded") is False
        assert not session.pending

    def test_compare_cancels_pending(self, live_session, fake_clock):
        session, on_result = live_session
        session.edit(LEFT, "a\n")
        result = session.compare()
        assert not session.pending
        fake_clock.advance_to(1000)
        assert on_result.call_count == 1
        assert session.result is result


class TestManualMode:
    """Edits never trigger a recompute on their own."""

    def test_edit_leaves_result_untouched(self, manual_session, fake_clock):
        session, on_result = manual_session
        session.edit(LEFT, "a\n")
        fake_clock.advance_to(10_000)
        assert session.result is None
        assert not session.pending
        on_result.assert_not_called()

    def test_compare_publishes(self, manual_session):
        session, _ = manual_session
        session.edit(LEFT, "a\nb\nc\n")
        session.edit(RIGHT, "a\nx\nc\n")
        result = session.compare()
        assert result.stats.added_lines == 1
        assert result.stats.removed_lines == 1
        assert session.result is result

    def test_switching_to_live_schedules(self, manual_session, fake_clock):
        session, on_result = manual_session
        session.edit(LEFT, "a\n")
        session.set_live(True)
        assert session.pending
        fake_clock.advance_to(400)
        on_result.assert_called_once()

    def test_switching_to_manual_cancels(self, live_session, fake_clock):
        session, on_result = live_session
        session.edit(LEFT, "a\n")
        session.set_live(False)
        fake_clock.advance_to(1000)
        on_result.assert_not_called()


class TestSwapAndClear:
    """External mutations of both panes."""

    def test_swap_exchanges_text_and_language(self, manual_session):
        session, _ = manual_session
        session.edit(LEFT, "left\n")
        session.edit(RIGHT, "right\n")
        session.set_language(LEFT, "json")
        session.swap()
        assert session.text(LEFT) == "right\n"
        assert session.text(RIGHT) == "left\n"
        assert session.language(LEFT) == "text"
        assert session.language(RIGHT) == "json"

    def test_manual_swap_without_result_does_not_compute(self, manual_session):
        session, on_result = manual_session
        session.edit(LEFT, "a\n")
        session.swap()
        assert session.result is None
        on_result.assert_not_called()

    def test_manual_swap_recomputes_visible_result(self, manual_session):
        session, _ = manual_session
        session.edit(LEFT, "a\nb\n")
        session.edit(RIGHT, "a\n")
        session.compare()
        assert session.result.stats.removed_lines == 1
        session.swap()
        assert session.result.stats.added_lines == 1
        assert session.result.stats.removed_lines == 0

    def test_live_swap_is_debounced(self, live_session, fake_clock):
        session, on_result = live_session
        session.load(LEFT, "a\n")
        session.flush()
        session.swap()
        assert session.pending
        fake_clock.advance(400)
        assert on_result.call_count == 2

    def test_clear_resets_everything(self, live_session):
        session, on_result = live_session
        session.edit(LEFT, "a\n")
        session.compare()
        session.edit(RIGHT, "b\n")
        session.clear()
        assert session.text(LEFT) == ""
        assert session.text(RIGHT) == ""
        assert session.result is None
        assert session.status == STATUS_IDLE
        assert not session.pending
        on_result.assert_called_with(None)

    def test_set_language_rejects_unknown(self, manual_session):
        session, _ = manual_session
        with pytest.raises(ValueError):
            session.set_language(LEFT, "cobol")


class TestPublishing:
    """Stale results never overwrite newer ones."""

    def test_stale_result_dropped(self, manual_session):
        session, on_result = manual_session
        older = session.begin_request()
        newer = session.begin_request()
        newer_result = compute_diff("a\n", "b\n")
        assert session.publish(newer, newer_result) is True
        assert session.publish(older, compute_diff("", "")) is False
        assert session.result is newer_result
        on_result.assert_called_once_with(newer_result)

    def test_clear_invalidates_in_flight(self, manual_session):
        session, _ = manual_session
        seq = session.begin_request()
        session.clear()
        assert session.publish(seq, compute_diff("a\n", "b\n")) is False
        assert session.result is None


class TestViews:
    """Changes-only projection and navigation over the published result."""

    def _session_with_change_at(self, manual_session, index, total):
        session, _ = manual_session
        lines = [f"line {i}" for i in range(total)]
        changed = list(lines)
        changed[index] = "changed"
        session.edit(LEFT, "\n".join(lines) + "\n")
        session.edit(RIGHT, "\n".join(changed) + "\n")
        session.compare()
        return session

    def test_visible_indices_follow_toggle(self, manual_session):
        session = self._session_with_change_at(manual_session, 10, 20)
        assert session.visible_indices() == list(range(20))
        assert session.toggle_changes_only() is True
        assert session.visible_indices() == [7, 8, 9, 10, 11, 12, 13]
        assert len(session.visible_rows()) == 7

    def test_nothing_visible_before_compare(self, manual_session):
        session, _ = manual_session
        assert session.visible_indices() == []
        assert session.visible_rows() == []
        assert session.next_change() == NO_SELECTION
        assert session.previous_change() == NO_SELECTION

    def test_navigation(self, manual_session):
        session = self._session_with_change_at(manual_session, 4, 8)
        assert session.selected_change == NO_SELECTION
        assert session.next_change() == 4
        assert session.next_change() == 4
        assert session.selected_change == 4

    def test_new_result_resets_selection(self, manual_session):
        session = self._session_with_change_at(manual_session, 4, 8)
        session.next_change()
        session.compare()
        assert session.selected_change == NO_SELECTION
