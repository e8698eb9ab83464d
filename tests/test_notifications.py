"""Tests for reminder scheduling."""

import asyncio
from datetime import date, datetime, time, timedelta

from calm_calendar.domain import Notification
from calm_calendar.services.notifications import (
    NotificationScheduler,
    NotificationState,
    due_events,
    notification_message,
)


class TestDueEvents:
    def test_event_due_exactly_at_threshold(self, sample_events):
        assert due_events(sample_events, datetime(2024, 7, 1, 9, 50), set()) == [sample_events[0]]

    def test_already_notified_is_skipped(self, sample_events):
        assert due_events(sample_events, datetime(2024, 7, 1, 9, 50), {"1"}) == []

    def test_not_yet_due(self, sample_events):
        assert due_events(sample_events, datetime(2024, 7, 1, 8, 0), set()) == []

    def test_past_events_are_not_due(self, sample_events):
        assert due_events(sample_events, datetime(2024, 7, 1, 10, 30), set()) == []

    def test_start_instant_is_excluded(self, sample_events):
        assert due_events(sample_events, datetime(2024, 7, 1, 10, 0), set()) == []

    def test_zero_minutes_never_fires(self, make_event):
        event = make_event(date=date(2024, 11, 10), start_time=time(9, 0), notification_time=0)
        assert due_events([event], datetime(2024, 11, 10, 8, 59, 59), set()) == []


def test_message_format(sample_events):
    assert notification_message(sample_events[0]) == "10분 후 이벤트 1 일정이 시작됩니다."


class TestScheduler:
    def _event(self, make_event):
        return make_event(
            id="1",
            title="test",
            date=date(2024, 10, 15),
            start_time=time(10, 0),
            end_time=time(11, 0),
            notification_time=10,
        )

    def test_tick_emits_once(self, make_event):
        event = self._event(make_event)
        scheduler = NotificationScheduler()
        now = datetime(2024, 10, 15, 9, 50)

        assert scheduler.tick([event], now) == [Notification(id="1", message="10분 후 test 일정이 시작됩니다.")]
        assert scheduler.tick([event], now) == []
        assert scheduler.tick([event], now + timedelta(minutes=5)) == []
        assert len(scheduler.notifications) == 1

    def test_remove_notification_does_not_refire(self, make_event):
        event = self._event(make_event)
        scheduler = NotificationScheduler()
        now = datetime(2024, 10, 15, 9, 50)
        scheduler.tick([event], now)

        assert scheduler.remove_notification(0)
        assert scheduler.notifications == []
        assert scheduler.tick([event], now) == []
        assert scheduler.state.notified_ids == {"1"}

    def test_remove_out_of_range_index(self):
        assert not NotificationScheduler().remove_notification(3)

    def test_separate_states_do_not_share_dedup(self, make_event):
        event = self._event(make_event)
        now = datetime(2024, 10, 15, 9, 50)
        first = NotificationScheduler(NotificationState())
        second = NotificationScheduler(NotificationState())

        assert first.tick([event], now)
        assert second.tick([event], now)

    def test_uses_clock_when_now_omitted(self, make_event):
        event = self._event(make_event)
        scheduler = NotificationScheduler(clock=lambda: datetime(2024, 10, 15, 9, 55))
        assert [n.id for n in scheduler.tick([event])] == ["1"]

    async def test_background_loop_ticks_until_stopped(self, make_event):
        event = self._event(make_event)
        received = []
        scheduler = NotificationScheduler(
            interval=timedelta(milliseconds=10),
            clock=lambda: datetime(2024, 10, 15, 9, 50),
            on_notification=received.append,
        )

        scheduler.start(lambda: [event])
        assert scheduler.notifications == []
        assert scheduler.is_running
        for _ in range(50):
            if scheduler.notifications:
                break
            await asyncio.sleep(0.01)
        await asyncio.sleep(0.05)
        await scheduler.stop()

        assert not scheduler.is_running
        assert [n.id for n in scheduler.notifications] == ["1"]
        assert received == scheduler.notifications

    async def test_failing_tick_does_not_stop_the_loop(self, make_event):
        event = self._event(make_event)
        calls = []

        def provider():
            calls.append(1)
            if len(calls) == 1:
                raise RuntimeError("store unavailable")
            return [event]

        scheduler = NotificationScheduler(
            interval=timedelta(milliseconds=5),
            clock=lambda: datetime(2024, 10, 15, 9, 50),
        )
        scheduler.start(provider)
        for _ in range(100):
            if scheduler.notifications:
                break
            await asyncio.sleep(0.01)

        assert scheduler.is_running
        assert len(calls) >= 2
        assert [n.id for n in scheduler.notifications] == ["1"]
        await scheduler.stop()
        assert not scheduler.is_running
