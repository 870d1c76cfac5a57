import uuid
from datetime import datetime, timezone

import pytest

from zoneclock.core.models import ResolvedLocation, StoreEvent
from zoneclock.core.store import ClockStore
from zoneclock.utils.time_utils import civil_hour

SUMMER_NOON = datetime(2026, 7, 15, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock(SUMMER_NOON)


@pytest.fixture
def store(clock):
    return ClockStore(clock=clock, uses_24_hour_clock=True)


def _by_title(store, title):
    return next(location for location in store.zones if location.title == title)


def test_warsaw_new_york_scenario(store):
    assert store.add_zone("Europe/Warsaw", "Warsaw", "Poland")
    warsaw = _by_title(store, "Warsaw")
    assert store.select_hour(9, warsaw)
    assert store.projected_hour(warsaw) == 9

    assert store.add_zone("America/New_York", "New York", "United States")
    new_york = _by_title(store, "New York")
    assert store.projected_hour(new_york) == 3

    store.remove_zone(warsaw.id)
    reference = store.selected_reference
    assert reference.source_id == new_york.id
    assert reference.local_hour == 3
    assert store.projected_hour(new_york) == 3


def test_select_then_project_on_same_location_returns_hour(store):
    store.add_zone("Asia/Kolkata", "Mumbai", "India")
    mumbai = store.zones[0]
    for hour in range(24):
        assert store.select_hour(hour, mumbai)
        assert store.projected_hour(mumbai) == hour


def test_no_selection_projects_nothing(store):
    store.add_zone("Europe/Warsaw", "Warsaw")
    assert store.projected_hour(store.zones[0]) is None


def test_select_in_untracked_location_is_ignored(store):
    store.add_zone("Europe/Warsaw", "Warsaw")
    store.select_hour(9, store.zones[0])
    before = store.selected_reference
    store.add_zone("Asia/Tokyo", "Tokyo")
    tokyo = store.zones[1]
    store.remove_zone(tokyo.id)
    assert not store.select_hour(10, tokyo)
    assert not store.select_hour(24, store.zones[0])
    assert store.selected_reference == before


def test_invalid_adds_leave_registry_unchanged(store):
    store.add_zone("Europe/Warsaw", "Warsaw")
    assert not store.add_zone("Not/AZone", "X", "")
    assert not store.add_zone("Europe/Warsaw", "   ", "")
    assert [location.title for location in store.zones] == ["Warsaw"]


def test_replace_source_reanchors_same_local_hour(store):
    store.add_zone("Europe/Warsaw", "Warsaw")
    store.add_zone("America/New_York", "New York")
    warsaw, new_york = store.zones
    store.select_hour(9, warsaw)

    assert store.replace_zone(warsaw.id, "Asia/Tokyo", "Tokyo", "Japan")
    reference = store.selected_reference
    assert reference.source_id == warsaw.id
    assert reference.source_time_zone == "Asia/Tokyo"
    assert reference.local_hour == 9
    assert civil_hour("Asia/Tokyo", reference.anchor) == 9
    # 09:00 JST is 20:00 EDT on the previous evening.
    assert store.projected_hour(new_york) == 20


def test_replace_other_location_keeps_anchor(store):
    store.add_zone("Europe/Warsaw", "Warsaw")
    store.add_zone("America/New_York", "New York")
    warsaw, new_york = store.zones
    store.select_hour(9, warsaw)
    before = store.selected_reference

    assert store.replace_zone(new_york.id, "America/Chicago", "Chicago")
    assert store.selected_reference == before
    assert store.projected_hour(store.zones[1]) == 2


def test_replace_rejections(store):
    store.add_zone("Europe/Warsaw", "Warsaw")
    assert not store.replace_zone(uuid.uuid4(), "Asia/Tokyo", "Tokyo")
    assert not store.replace_zone(store.zones[0].id, "Not/AZone", "Tokyo")


def test_remove_source_falls_back_to_same_index(store):
    for zone, title in [("Europe/Warsaw", "Warsaw"), ("Asia/Tokyo", "Tokyo"), ("America/Chicago", "Chicago")]:
        store.add_zone(zone, title)
    _, tokyo, chicago = store.zones
    store.select_hour(18, tokyo)

    store.remove_zone(tokyo.id)
    reference = store.selected_reference
    assert reference.source_id == chicago.id
    # 18:00 in Tokyo is 04:00 in Chicago; the highlighted hour stays put.
    assert reference.local_hour == 4
    assert store.projected_hour(chicago) == 4
    assert store.projected_hour(store.zones[0]) == 11


def test_remove_last_source_falls_back_to_previous_index(store):
    store.add_zone("Europe/Warsaw", "Warsaw")
    store.add_zone("Asia/Tokyo", "Tokyo")
    warsaw, tokyo = store.zones
    store.select_hour(7, tokyo)

    store.remove_zone(tokyo.id)
    assert store.selected_reference.source_id == warsaw.id
    assert store.selected_reference.local_hour == 0
    assert store.projected_hour(warsaw) == 0


def test_remove_non_source_keeps_selection(store):
    store.add_zone("Europe/Warsaw", "Warsaw")
    store.add_zone("Asia/Tokyo", "Tokyo")
    warsaw, tokyo = store.zones
    store.select_hour(7, warsaw)
    before = store.selected_reference

    store.remove_zone(tokyo.id)
    store.remove_zone(uuid.uuid4())
    assert store.selected_reference == before


def test_removing_everything_clears_selection(store):
    store.add_zone("Europe/Warsaw", "Warsaw")
    store.select_hour(7, store.zones[0])
    store.remove_zone(store.zones[0].id)
    assert store.zones == ()
    assert store.selected_reference is None
    assert not store.reset_to_current_hour()


def test_move_preserves_locations_and_selection(store):
    for zone, title in [("Europe/Warsaw", "Warsaw"), ("Asia/Tokyo", "Tokyo"), ("America/Chicago", "Chicago")]:
        store.add_zone(zone, title)
    before = list(store.zones)
    store.select_hour(10, before[1])
    reference = store.selected_reference

    assert store.move_zone(before[0].id, 3)
    assert sorted(location.id for location in store.zones) == sorted(location.id for location in before)
    assert [location.title for location in store.zones] == ["Tokyo", "Warsaw", "Chicago"]
    assert store.selected_reference == reference
    assert not store.move_zone(before[0].id, 3)


def test_reset_selects_current_hour_of_first_location(store):
    store.add_zone("Asia/Tokyo", "Tokyo")
    store.add_zone("Europe/Warsaw", "Warsaw")
    assert store.reset_to_current_hour()
    reference = store.selected_reference
    assert reference.source_id == store.zones[0].id
    assert reference.local_hour == 21  # 12:00 UTC is 21:00 in Tokyo


def test_selection_uses_the_current_date(store, clock):
    store.add_zone("Europe/Warsaw", "Warsaw")
    warsaw = store.zones[0]
    store.select_hour(9, warsaw)
    first_anchor = store.selected_reference.anchor

    clock.now = datetime(2026, 7, 16, 12, 0, tzinfo=timezone.utc)
    store.select_hour(9, warsaw)
    assert (store.selected_reference.anchor - first_anchor).days == 1


def test_tick_advances_now_without_touching_state(store, clock):
    store.add_zone("Europe/Warsaw", "Warsaw")
    store.select_hour(9, store.zones[0])
    before = (store.zones, store.selected_reference)
    events = []
    store.subscribe(events.append)

    clock.now = datetime(2026, 7, 15, 12, 0, 1, tzinfo=timezone.utc)
    store.tick()
    assert store.now == clock.now
    assert (store.zones, store.selected_reference) == before
    assert events == [StoreEvent.NOW]


def test_observers_receive_events_and_can_unsubscribe(store):
    events = []
    unsubscribe = store.subscribe(events.append)
    store.add_zone("Europe/Warsaw", "Warsaw")
    store.select_hour(9, store.zones[0])
    unsubscribe()
    store.add_zone("Asia/Tokyo", "Tokyo")
    assert events == [StoreEvent.ZONES, StoreEvent.SELECTION]


def test_failing_observer_does_not_break_mutation(store):
    def explode(event):
        raise RuntimeError("boom")

    store.subscribe(explode)
    assert store.add_zone("Europe/Warsaw", "Warsaw")
    assert len(store.zones) == 1


def test_seed_defaults_replaces_first_row_and_selects_current_hour(store):
    store.seed_defaults(ResolvedLocation("Asia/Tokyo", "Tokyo", "JP"))
    titles = [location.title for location in store.zones]
    assert titles == ["Tokyo", "Calgary", "Houston", "Miami", "Warsaw"]
    assert store.selected_reference.source_id == store.zones[0].id
    assert store.selected_reference.local_hour == 21


def test_apply_resolved_location_reanchors_selection(store):
    store.seed_defaults(ResolvedLocation("UTC", "UTC", ""))
    first = store.zones[0]
    assert store.selected_reference.local_hour == 12

    assert store.apply_resolved_location(ResolvedLocation("Europe/Warsaw", "Warsaw", "Poland"))
    assert store.zones[0].id == first.id
    assert store.zones[0].time_zone == "Europe/Warsaw"
    assert store.selected_reference.local_hour == 12
    assert store.projected_hour(store.zones[0]) == 12


def test_rows_and_menu_bar_label(store):
    store.add_zone("Europe/Warsaw", "Warsaw", "Poland")
    store.add_zone("America/New_York", "New York")
    store.select_hour(9, store.zones[0])

    rows = store.rows()
    assert [row.title for row in rows] == ["Warsaw", "New York"]
    assert rows[0].current_time == "14:00"
    assert rows[0].projected_hour == 9
    assert rows[0].projected_is_day is True
    assert rows[0].projected_hour_label == "09"
    assert rows[0].is_selection_source is True
    assert rows[1].projected_hour == 3
    assert rows[1].projected_is_day is False
    assert rows[1].projected_hour_label == "03"
    assert rows[1].is_selection_source is False
    assert store.menu_bar_label == "08:00"


def test_rows_use_twelve_hour_labels():
    store = ClockStore(clock=lambda: SUMMER_NOON, uses_24_hour_clock=False)
    store.add_zone("Europe/Warsaw", "Warsaw")
    store.add_zone("America/New_York", "New York")
    store.select_hour(12, store.zones[0])

    rows = store.rows()
    assert [row.projected_hour_label for row in rows] == ["12 PM", "6  AM"]
    assert rows[0].current_time == "2:00PM"
