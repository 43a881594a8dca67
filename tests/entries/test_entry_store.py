"""Tests for EntryStore — entry lifecycle, per-day grouping, and selection."""

from datetime import date, datetime, timedelta

from pagebound.entries.models import ImageAttachment, JournalEntry, Mood
from pagebound.entries.store import EntryStore, InMemoryEntryRepository, most_recent_first

TODAY = date(2024, 1, 5)
YESTERDAY = date(2024, 1, 4)


class _Clock:
    """Settable clock; each call returns the current instant."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current += timedelta(**kwargs)


def _make_store(clock: _Clock | None = None) -> tuple[EntryStore, InMemoryEntryRepository]:
    repo = InMemoryEntryRepository()
    store = EntryStore(repo, now=clock or _Clock(datetime(2024, 1, 5, 9, 0)))
    return store, repo


class TestCreateEntry:
    def test_hello_world(self):
        store, _ = _make_store()
        store.create_entry(TODAY, "hello world", None, [])

        entries = store.day_entries(TODAY)
        assert len(entries) == 1
        assert entries[0].content == "hello world"
        assert entries[0].word_count == 2

    def test_word_count_ignores_markup(self):
        store, _ = _make_store()
        entry = store.create_entry(TODAY, "<p>One <b>two</b></p><p>three</p>")
        assert entry.word_count == 3

    def test_new_entry_becomes_selected(self):
        clock = _Clock(datetime(2024, 1, 5, 9, 0))
        store, _ = _make_store(clock)
        store.create_entry(TODAY, "first")
        clock.advance(minutes=5)
        second = store.create_entry(TODAY, "second")

        assert store.selected_entry(TODAY).id == second.id

    def test_tags_normalized(self):
        store, _ = _make_store()
        entry = store.create_entry(TODAY, "x", tags=[" Work ", "work", "HEALTH", ""])
        assert entry.tags == ["work", "health"]

    def test_persists_through_repository(self):
        store, repo = _make_store()
        entry = store.create_entry(TODAY, "saved", Mood.CALM)
        assert repo.snapshot()[entry.id].mood is Mood.CALM


class TestDayEntries:
    def test_only_entries_of_that_day(self):
        store, _ = _make_store()
        store.create_entry(TODAY, "today")
        store.create_entry(YESTERDAY, "yesterday")

        assert [e.content for e in store.day_entries(TODAY)] == ["today"]
        assert [e.content for e in store.day_entries(YESTERDAY)] == ["yesterday"]
        assert store.day_entries(date(2024, 1, 1)) == []

    def test_ordered_by_creation_ascending(self):
        repo = InMemoryEntryRepository(
            [
                JournalEntry(date=TODAY, content="late", created_at=datetime(2024, 1, 5, 20)),
                JournalEntry(date=TODAY, content="early", created_at=datetime(2024, 1, 5, 6)),
                JournalEntry(date=TODAY, content="noon", created_at=datetime(2024, 1, 5, 12)),
            ]
        )
        store = EntryStore(repo, now=lambda: datetime(2024, 1, 5, 21))
        assert [e.content for e in store.day_entries(TODAY)] == ["early", "noon", "late"]


class TestUpdateEntry:
    def test_updates_today(self):
        store, _ = _make_store()
        entry = store.create_entry(TODAY, "draft")

        updated = store.update_entry(entry.id, "a longer draft now", Mood.HAPPY, ["Ideas"])

        assert updated is not None
        assert updated.content == "a longer draft now"
        assert updated.word_count == 4
        assert updated.mood is Mood.HAPPY
        assert updated.tags == ["ideas"]
        assert store.get_entry(entry.id).content == "a longer draft now"

    def test_rejected_when_locked(self):
        store, _ = _make_store()
        entry = store.create_entry(TODAY, "original")
        store.lock_entry(entry.id)

        assert store.update_entry(entry.id, "changed", None, []) is None
        assert store.get_entry(entry.id).content == "original"

    def test_rejected_on_past_day(self):
        store, _ = _make_store()
        entry = store.create_entry(YESTERDAY, "original")

        assert store.update_entry(entry.id, "changed", None, []) is None
        assert store.get_entry(entry.id).content == "original"

    def test_unknown_id_is_noop(self):
        store, repo = _make_store()
        assert store.update_entry("missing", "x", None, []) is None
        assert repo.snapshot() == {}

    def test_update_tags_only(self):
        store, _ = _make_store()
        entry = store.create_entry(TODAY, "words here", Mood.SAD, ["old"])

        updated = store.update_entry_tags(entry.id, ["New", "new", "other"])

        assert updated.tags == ["new", "other"]
        assert updated.content == "words here"
        assert updated.mood is Mood.SAD

    def test_update_tags_rejected_on_past_day(self):
        store, _ = _make_store()
        entry = store.create_entry(YESTERDAY, "x", tags=["old"])
        assert store.update_entry_tags(entry.id, ["new"]) is None
        assert store.get_entry(entry.id).tags == ["old"]

    def test_updated_at_moves(self):
        clock = _Clock(datetime(2024, 1, 5, 9, 0))
        store, _ = _make_store(clock)
        entry = store.create_entry(TODAY, "x")
        clock.advance(hours=1)

        updated = store.update_entry(entry.id, "y", None, [])

        assert updated.updated_at == datetime(2024, 1, 5, 10, 0)
        assert updated.created_at == datetime(2024, 1, 5, 9, 0)


class TestImages:
    def test_attach_and_remove(self):
        store, _ = _make_store()
        entry = store.create_entry(TODAY, "x")
        image = ImageAttachment(url="file:///photo.jpg", caption="Sunset")

        store.attach_image(entry.id, image)
        assert [i.url for i in store.get_entry(entry.id).images] == ["file:///photo.jpg"]

        store.remove_image(entry.id, image.id)
        assert store.get_entry(entry.id).images == []

    def test_attach_rejected_when_locked(self):
        store, _ = _make_store()
        entry = store.create_entry(TODAY, "x")
        store.lock_entry(entry.id)

        assert store.attach_image(entry.id, ImageAttachment(url="a.png")) is None
        assert store.get_entry(entry.id).images == []


class TestLocking:
    def test_lock_is_one_way(self):
        store, _ = _make_store()
        entry = store.create_entry(TODAY, "x")

        assert store.lock_entry(entry.id).is_locked is True
        assert store.lock_entry(entry.id).is_locked is True
        assert not hasattr(store, "unlock_entry")

    def test_lock_unknown_is_noop(self):
        store, _ = _make_store()
        assert store.lock_entry("missing") is None

    def test_past_day_not_editable_even_if_unlocked(self):
        store, _ = _make_store()
        entry = store.create_entry(YESTERDAY, "x")
        assert entry.is_locked is False
        assert store.is_editable(entry) is False

    def test_edit_paths_consult_is_editable(self):
        class _FrozenStore(EntryStore):
            def is_editable(self, entry: JournalEntry) -> bool:
                return False

        store = _FrozenStore(InMemoryEntryRepository(), now=lambda: datetime(2024, 1, 5, 9, 0))
        entry = store.create_entry(TODAY, "draft", Mood.CALM, ["work"])

        assert store.update_entry(entry.id, "changed", Mood.SAD, []) is None
        assert store.update_entry_tags(entry.id, ["other"]) is None
        assert store.attach_image(entry.id, ImageAttachment(url="a.png")) is None
        assert store.get_entry(entry.id).content == "draft"
        assert store.toggle_bookmark(entry.id).is_bookmarked is True


class TestEntryUpdates:
    def test_allowed_on_locked_entry(self):
        store, _ = _make_store()
        entry = store.create_entry(TODAY, "x")
        store.lock_entry(entry.id)

        updated = store.add_entry_update(entry.id, "Looking back, it went fine.")

        assert updated is not None
        assert [u.content for u in updated.updates] == ["Looking back, it went fine."]
        assert updated.updates[0].created_at == datetime(2024, 1, 5, 9, 0)

    def test_allowed_on_past_day(self):
        store, _ = _make_store()
        entry = store.create_entry(date(2023, 6, 1), "x")

        store.add_entry_update(entry.id, "one")
        store.add_entry_update(entry.id, "two")

        assert [u.content for u in store.get_entry(entry.id).updates] == ["one", "two"]

    def test_unknown_id_is_noop(self):
        store, _ = _make_store()
        assert store.add_entry_update("missing", "x") is None


class TestBookmarks:
    def test_toggle_twice_restores(self):
        store, _ = _make_store()
        entry = store.create_entry(TODAY, "x")

        assert store.toggle_bookmark(entry.id).is_bookmarked is True
        assert store.toggle_bookmark(entry.id).is_bookmarked is False
        assert store.get_entry(entry.id).is_bookmarked is False

    def test_toggle_allowed_on_locked_past_entry(self):
        store, _ = _make_store()
        entry = store.create_entry(YESTERDAY, "x")
        store.lock_entry(entry.id)
        assert store.toggle_bookmark(entry.id).is_bookmarked is True

    def test_bookmarked_entries_most_recent_first(self):
        store, _ = _make_store()
        older = store.create_entry(date(2024, 1, 1), "older")
        newer = store.create_entry(date(2024, 1, 3), "newer")
        store.create_entry(TODAY, "not bookmarked")
        store.toggle_bookmark(older.id)
        store.toggle_bookmark(newer.id)

        assert [e.id for e in store.bookmarked_entries()] == [newer.id, older.id]


class TestDeleteAndSelection:
    def test_delete_unknown_is_noop(self):
        store, _ = _make_store()
        store.create_entry(TODAY, "x")
        assert store.delete_entry("missing") is None
        assert len(store.all_entries()) == 1

    def test_deleting_selected_falls_back_to_remaining_entry(self):
        clock = _Clock(datetime(2024, 1, 5, 9, 0))
        store, _ = _make_store(clock)
        first = store.create_entry(TODAY, "first")
        clock.advance(minutes=1)
        second = store.create_entry(TODAY, "second")
        clock.advance(minutes=1)
        third = store.create_entry(TODAY, "third")
        assert store.selected_entry(TODAY).id == third.id

        store.delete_entry(third.id)
        assert store.selected_entry(TODAY).id == second.id

        store.delete_entry(second.id)
        assert store.selected_entry(TODAY).id == first.id

    def test_deleting_last_entry_clears_selection(self):
        store, _ = _make_store()
        entry = store.create_entry(TODAY, "only")
        store.delete_entry(entry.id)
        assert store.selected_entry(TODAY) is None

    def test_deleting_unselected_entry_keeps_selection(self):
        clock = _Clock(datetime(2024, 1, 5, 9, 0))
        store, _ = _make_store(clock)
        first = store.create_entry(TODAY, "first")
        clock.advance(minutes=1)
        store.create_entry(TODAY, "second")
        store.select_entry(TODAY, first.id)

        store.delete_entry(store.day_entries(TODAY)[1].id)
        assert store.selected_entry(TODAY).id == first.id

    def test_selection_rederived_after_external_delete(self):
        clock = _Clock(datetime(2024, 1, 5, 9, 0))
        store, repo = _make_store(clock)
        first = store.create_entry(TODAY, "first")
        clock.advance(minutes=1)
        second = store.create_entry(TODAY, "second")

        repo.delete(second.id)

        assert store.selected_entry(TODAY).id == first.id

    def test_select_entry_from_other_day_ignored(self):
        store, _ = _make_store()
        today_entry = store.create_entry(TODAY, "today")
        other = store.create_entry(YESTERDAY, "yesterday")

        store.select_entry(TODAY, other.id)

        assert store.selected_entry(TODAY).id == today_entry.id

    def test_select_entry(self):
        clock = _Clock(datetime(2024, 1, 5, 9, 0))
        store, _ = _make_store(clock)
        first = store.create_entry(TODAY, "first")
        clock.advance(minutes=1)
        store.create_entry(TODAY, "second")

        store.select_entry(TODAY, first.id)

        assert store.selected_entry(TODAY).id == first.id

    def test_empty_day_has_no_selection(self):
        store, _ = _make_store()
        assert store.selected_entry(TODAY) is None


class TestClock:
    def test_is_past_day(self):
        store, _ = _make_store()
        assert store.is_past_day(YESTERDAY) is True
        assert store.is_past_day(TODAY) is False
        assert store.is_past_day(date(2024, 1, 6)) is False

    def test_past_day_uses_calendar_granularity(self):
        store = EntryStore(now=lambda: datetime(2024, 1, 5, 0, 0, 1))
        assert store.is_past_day(date(2024, 1, 5)) is False


class TestMostRecentFirst:
    def test_orders_by_day_then_creation(self):
        a = JournalEntry(date=date(2024, 1, 1), created_at=datetime(2024, 1, 1, 8))
        b = JournalEntry(date=date(2024, 1, 2), created_at=datetime(2024, 1, 2, 8))
        c = JournalEntry(date=date(2024, 1, 2), created_at=datetime(2024, 1, 2, 20))
        assert [e.id for e in most_recent_first([a, b, c])] == [c.id, b.id, a.id]
