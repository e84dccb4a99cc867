import asyncio
import pytest
from hours.domain.ConflictReport import ConflictReport
from hours.domain.DayPlan import DayPlan
from hours.domain.Weekday import Weekday
from hours.events.Event_Bus import EventBus, SCHEDULE_CONFLICTS_DETECTED, SCHEDULE_SAVE_FAILED, SCHEDULE_SAVED
from hours.infra.Schedule_Repository import ScheduleRepository
from hours.logic.editor.session import SaveStatus, ScheduleEditor
from hours.logic.exceptions.special_days import add_special_day, new_special_day


class CountingRepository(ScheduleRepository):
    def __init__(self, data_dir, fail=False):
        super().__init__(data_dir)
        self.saves = []
        self.fail = fail

    def save(self, restaurant_id, schedule):
        if self.fail:
            raise OSError("disk full")
        self.saves.append(schedule)
        return super().save(restaurant_id, schedule)


class StubChecker:
    def __init__(self, report):
        self.report = report
        self.calls = 0

    async def check_conflicts(self, restaurant_id, schedule):
        self.calls += 1
        return self.report


class SlowChecker(StubChecker):
    def __init__(self, seconds):
        super().__init__(ConflictReport.none())
        self.seconds = seconds

    async def check_conflicts(self, restaurant_id, schedule):
        await asyncio.sleep(self.seconds)
        return await super().check_conflicts(restaurant_id, schedule)


class StatusRecordingRepository(CountingRepository):
    def __init__(self, data_dir):
        super().__init__(data_dir)
        self.editor = None
        self.statuses = []

    def save(self, restaurant_id, schedule):
        self.statuses.append(self.editor.status)
        return super().save(restaurant_id, schedule)


CONFLICTING = ConflictReport(True, "Found 1 reservation(s) that would conflict", ("2025-12-25 at 21:00",))


@pytest.fixture
def bus():
    events = []
    event_bus = EventBus()
    for name in (SCHEDULE_SAVED, SCHEDULE_SAVE_FAILED, SCHEDULE_CONFLICTS_DETECTED):
        event_bus.subscribe(name, lambda n, p: events.append((n, p)))
    event_bus.events = events
    return event_bus


def open_monday(week):
    return week.with_day(Weekday.MONDAY, DayPlan().toggle_enabled())


def add_dinner(week):
    return week.with_day(Weekday.MONDAY, week[Weekday.MONDAY].add_shift("Dinner"))


@pytest.mark.asyncio
async def test_burst_of_edits_saves_latest_once(tmp_path, bus):
    repo = CountingRepository(tmp_path)
    editor = ScheduleEditor("resto-1", repo, delay=0.02, event_bus=bus)
    editor.edit_week(open_monday)
    editor.edit_week(add_dinner)
    assert editor.status is SaveStatus.SAVING
    assert editor.autosave_pending
    await editor._autosave.wait_idle()
    assert len(repo.saves) == 1
    assert [s.name for s in repo.saves[0].week[Weekday.MONDAY].shifts] == ["Lunch", "Dinner"]
    assert editor.status is SaveStatus.SAVED
    assert repo.load("resto-1") == editor.schedule
    assert [n for n, _ in bus.events] == [SCHEDULE_SAVED]


@pytest.mark.asyncio
async def test_autosave_does_not_check_reservations(tmp_path, bus):
    checker = StubChecker(CONFLICTING)
    editor = ScheduleEditor("resto-1", CountingRepository(tmp_path), checker=checker, delay=0.01, event_bus=bus)
    editor.edit_week(open_monday)
    await editor.flush()
    assert checker.calls == 0
    assert editor.status is SaveStatus.SAVED


@pytest.mark.asyncio
async def test_failed_save_keeps_state_and_reports(tmp_path, bus):
    repo = CountingRepository(tmp_path, fail=True)
    editor = ScheduleEditor("resto-1", repo, delay=0.01, event_bus=bus)
    editor.edit_week(open_monday)
    await editor.flush()
    assert editor.status is SaveStatus.IDLE
    assert editor.last_error == "disk full"
    assert editor.schedule.week[Weekday.MONDAY].enabled
    assert bus.events == [(SCHEDULE_SAVE_FAILED, {"restaurant_id": "resto-1", "error": "disk full"})]


@pytest.mark.asyncio
async def test_explicit_save_held_back_by_conflicts(tmp_path, bus):
    repo = CountingRepository(tmp_path)
    editor = ScheduleEditor("resto-1", repo, checker=StubChecker(CONFLICTING), delay=10, event_bus=bus)
    editor.apply(lambda s: add_special_day(s, new_special_day("2025-12-25", "Navidad", "closed")))
    result = await editor.save()
    assert not result.saved
    assert result.report.conflicts == CONFLICTING.conflicts
    assert repo.saves == []
    assert bus.events[0][0] == SCHEDULE_CONFLICTS_DETECTED
    assert bus.events[0][1]["count"] == 1
    # the pending auto-save is left armed
    assert editor.autosave_pending
    editor._autosave.cancel()


@pytest.mark.asyncio
async def test_forced_save_writes_despite_conflicts(tmp_path, bus):
    repo = CountingRepository(tmp_path)
    editor = ScheduleEditor("resto-1", repo, checker=StubChecker(CONFLICTING), delay=10, event_bus=bus)
    editor.apply(lambda s: add_special_day(s, new_special_day("2025-12-25", "Navidad", "closed")))
    result = await editor.save(force=True)
    assert result.saved
    assert result.report.has_conflicts
    assert len(repo.saves) == 1
    assert not editor.autosave_pending
    assert editor.status is SaveStatus.SAVED
    assert bus.events[-1] == (SCHEDULE_SAVED, {"restaurant_id": "resto-1", "special_days": 1})


@pytest.mark.asyncio
async def test_editor_starts_from_stored_schedule(tmp_path, bus):
    repo = ScheduleRepository(tmp_path)
    first = ScheduleEditor("resto-1", repo, delay=0.01, event_bus=bus)
    first.edit_week(open_monday)
    await first.flush()
    second = ScheduleEditor("resto-1", repo, event_bus=bus)
    assert second.schedule == first.schedule


def open_tuesday(week):
    return week.with_day(Weekday.TUESDAY, DayPlan().toggle_enabled())


@pytest.mark.asyncio
async def test_edit_during_conflict_check_is_still_saved(tmp_path, bus):
    repo = CountingRepository(tmp_path)
    editor = ScheduleEditor("resto-1", repo, checker=SlowChecker(0.05), delay=10, event_bus=bus)
    editor.edit_week(open_monday)
    pending_save = asyncio.create_task(editor.save())
    await asyncio.sleep(0.01)
    editor.edit_week(open_tuesday)
    result = await pending_save

    assert result.saved
    assert not repo.saves[0].week[Weekday.TUESDAY].enabled
    assert editor.autosave_pending
    assert editor.status is SaveStatus.SAVING

    await editor.flush()
    stored = repo.load("resto-1")
    assert stored.week[Weekday.MONDAY].enabled
    assert stored.week[Weekday.TUESDAY].enabled
    assert editor.status is SaveStatus.SAVED


@pytest.mark.asyncio
async def test_explicit_save_reports_saving_then_returns_to_idle(tmp_path, bus):
    repo = StatusRecordingRepository(tmp_path)
    editor = ScheduleEditor("resto-1", repo, delay=10, event_bus=bus, saved_status_seconds=0.02)
    repo.editor = editor
    assert editor.status is SaveStatus.IDLE

    result = await editor.save()
    assert result.saved
    assert repo.statuses == [SaveStatus.SAVING]
    assert editor.status is SaveStatus.SAVED
    await asyncio.sleep(0.05)
    assert editor.status is SaveStatus.IDLE


@pytest.mark.asyncio
async def test_new_edit_keeps_saved_status_from_resetting(tmp_path, bus):
    editor = ScheduleEditor("resto-1", CountingRepository(tmp_path), delay=10, event_bus=bus,
                            saved_status_seconds=0.02)
    await editor.save()
    editor.edit_week(open_monday)
    await asyncio.sleep(0.05)
    assert editor.status is SaveStatus.SAVING
    editor._autosave.cancel()
