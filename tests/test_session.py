import gc

import pytest

from data.models import ProductStat
from data.notifications import ToastQueue
from data.session import DashboardSession, ensure_session
from data.store import InMemoryStore, StoreError


class FailingStore(InMemoryStore):
    """Every write raises like a dropped connection"""

    def save_product_stat(self, date, product_name, stat):
        raise StoreError("network down")

    def add_product(self, name):
        raise StoreError("network down")

    def remove_product(self, name):
        raise StoreError("network down")

    def delete_all_daily_records(self):
        raise StoreError("network down")


def _raise_store_error(*args):
    raise StoreError("down")


def _toast_types(session):
    return [t.type for t in session.toasts.active()]


class TestSessionLifecycle:

    def test_open_loads_cache(self, session):
        assert session.products == ["A", "B"]
        assert session.selected_product == "A"
        assert sorted(session.all_stats) == ["2024-01-01", "2024-01-02"]
        assert session.is_loading is False

    def test_context_manager_tears_down_subscriptions(self, store):
        with DashboardSession(store) as session:
            assert session.is_open
            assert len(store._catalog_listeners) == 1
            assert len(store._records_listeners) == 1

        assert not session.is_open
        assert store._catalog_listeners == []
        assert store._records_listeners == []

    def test_close_is_idempotent(self, session):
        session.close()
        session.close()
        assert not session.is_open

    def test_open_twice_subscribes_once(self, session, store):
        session.open()
        assert len(store._catalog_listeners) == 1

    def test_closed_session_stops_receiving_updates(self, session, store):
        session.close()
        store.add_product("C")
        assert session.products == ["A", "B"]

    def test_failed_subscribe_releases_first_subscription(self, store):
        store.fetch_daily_records = _raise_store_error
        session = DashboardSession(store)

        with pytest.raises(StoreError):
            session.open()
        assert store._catalog_listeners == []

    def test_version_bumps_on_every_update(self, session, store):
        before = session.version
        store.add_product("C")
        store.save_product_stat("2024-01-02", "C", ProductStat())
        assert session.version == before + 2

    def test_abandoned_sessions_release_subscriptions(self, store):
        for _ in range(50):
            DashboardSession(store).open()
        gc.collect()

        store.add_product("C")
        store.save_product_stat("2024-01-03", "C", ProductStat())

        assert store._catalog_listeners == []
        assert store._records_listeners == []


class TestEnsureSession:

    def test_keeps_open_session_on_same_store(self, session, store):
        assert ensure_session(session, store) is session
        assert store.listener_count() == 2

    def test_creates_session_when_missing(self, store):
        session = ensure_session(None, store, current_date="2024-01-02")
        assert session.is_open
        assert session.current_date == "2024-01-02"
        session.close()

    def test_replacing_session_closes_previous(self, session, sample_records):
        other_store = InMemoryStore(products=["X"], records=sample_records)

        replacement = ensure_session(session, other_store)

        assert replacement is not session
        assert not session.is_open
        assert session.store.listener_count() == 0
        assert replacement.products == ["X"]
        replacement.close()

    def test_reopens_closed_session(self, session, store):
        session.close()
        replacement = ensure_session(session, store)
        assert replacement.is_open
        assert store.listener_count() == 2
        replacement.close()


class TestSelection:

    def test_selection_kept_when_still_in_catalog(self, session, store):
        session.select_product("B")
        store.add_product("C")
        assert session.selected_product == "B"

    def test_selection_falls_back_to_first_product(self, session, store):
        session.select_product("B")
        store.remove_product("B")
        assert session.selected_product == "A"

    def test_empty_catalog_clears_selection(self, session, store):
        store.remove_product("A")
        store.remove_product("B")
        assert session.selected_product is None

    def test_todays_stat_and_yesterdays_no_answer(self, session):
        assert session.todays_stat.total_for_day == 5
        assert session.yesterdays_no_answer == 1

        session.select_product("B")
        assert session.todays_stat == ProductStat()
        assert session.yesterdays_no_answer == 1

    def test_lookups_follow_date_changes(self, session):
        session.set_date("2024-01-01")
        assert session.todays_stat.total_for_day == 10
        assert session.yesterdays_no_answer == 0

    def test_set_date_rejects_bad_format(self, session):
        with pytest.raises(ValueError):
            session.set_date("01/02/2024")
        assert session.current_date == "2024-01-02"


class TestActions:

    def test_save_merges_and_notifies(self, session):
        session.select_product("B")
        assert session.save_stats(ProductStat(total_for_day=6, no_answer=2)) is True

        products = session.all_stats["2024-01-02"].products
        assert products["A"].total_for_day == 5
        assert products["B"].total_for_day == 6
        assert _toast_types(session) == ["success"]

    def test_save_without_product_warns(self, store, clock):
        empty = InMemoryStore(records=store.fetch_daily_records())
        with DashboardSession(empty, toasts=ToastQueue(clock=clock)) as session:
            assert session.save_stats(ProductStat()) is False
            assert _toast_types(session) == ["warning"]
            assert empty.fetch_daily_records() == store.fetch_daily_records()

    def test_add_product(self, session):
        assert session.add_product("  C  ") is True
        assert session.products == ["A", "B", "C"]
        assert _toast_types(session) == ["success"]

    @pytest.mark.parametrize("name", ["", "   ", "A"])
    def test_add_invalid_product_warns_without_remote_call(self, session, store, name):
        calls = []
        store.add_product = calls.append

        assert session.add_product(name) is False
        assert calls == []
        assert _toast_types(session) == ["warning"]

    def test_delete_selected_product_moves_selection(self, session):
        assert session.delete_product("A") is True
        assert session.selected_product == "B"
        assert "A" in session.all_stats["2024-01-01"].products
        assert _toast_types(session) == ["info"]

    def test_reset_all_keeps_catalog(self, session):
        assert session.reset_all_stats() is True
        assert session.all_stats == {}
        assert session.products == ["A", "B"]
        assert _toast_types(session) == ["success"]


class TestActionFailures:

    @pytest.fixture
    def failing(self, sample_records, clock):
        store = FailingStore(products=["A", "B"], records=sample_records)
        with DashboardSession(store, current_date="2024-01-02", toasts=ToastQueue(clock=clock)) as session:
            yield session

    def test_save_failure(self, failing):
        before = failing.all_stats
        assert failing.save_stats(ProductStat(total_for_day=99)) is False
        assert failing.all_stats is before
        assert _toast_types(failing) == ["error"]

    def test_add_failure(self, failing):
        assert failing.add_product("C") is False
        assert failing.products == ["A", "B"]
        assert _toast_types(failing) == ["error"]

    def test_delete_failure_keeps_selection(self, failing):
        assert failing.delete_product("A") is False
        assert failing.selected_product == "A"
        assert _toast_types(failing) == ["error"]

    def test_reset_failure(self, failing):
        assert failing.reset_all_stats() is False
        assert len(failing.all_stats) == 2
        assert _toast_types(failing) == ["error"]

    def test_refresh_failure_is_logged_not_raised(self, failing):
        failing.store.refresh = _raise_store_error
        assert failing.refresh() is False
