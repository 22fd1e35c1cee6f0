"""Tests for concurrent query handling and re-merging in the session."""

from conftest import FakeOS, ManualPool, make_app
from window_switcher.models import App
from window_switcher.session import SwitcherSession
from window_switcher.switcher import Switcher

FAST, SLOW = 0, 1


def _apps_payload(*apps: App):
    return [app.to_dict() for app in apps]


def _session(switcher: Switcher, **kwargs):
    pool = ManualPool()
    updates = []
    session = SwitcherSession(switcher, pool=pool, on_update=lambda: updates.append(1), **kwargs)
    return session, pool, updates


def test_view_is_empty_before_any_result(switcher: Switcher) -> None:
    session, _, _ = _session(switcher)
    session.start()
    assert session.is_loading is True
    assert session.view().all_items() == []


def test_start_paints_from_cache(switcher: Switcher) -> None:
    switcher.cache.set([make_app("cached", titles=["w"])])
    session, _, _ = _session(switcher)
    session.start()
    assert session.is_loading is False
    assert [i.bundle_id for i in session.view().all_items()] == ["cached"]


def test_fast_then_slow(switcher: Switcher, fake_os: FakeOS) -> None:
    fake_os.apps = _apps_payload(make_app("a", titles=["w0", "w1"]))
    fake_os.states = {"a": {"minimized": [False, True]}}
    session, pool, updates = _session(switcher)
    session.start()

    pool.run(FAST)
    view = session.view()
    assert [i.id for i in view.active] == ["a-w0", "a-w1"]
    assert view.minimized == []

    pool.run(SLOW)
    view = session.view()
    assert [i.id for i in view.active] == ["a-w0"]
    assert [i.id for i in view.minimized] == ["a-w1"]
    assert len(updates) == 2


def test_slow_then_fast(switcher: Switcher, fake_os: FakeOS) -> None:
    fake_os.apps = _apps_payload(make_app("a", titles=["w0", "w1"]))
    fake_os.states = {"a": [True, False]}
    session, pool, _ = _session(switcher)
    session.start()

    pool.run(SLOW)
    assert session.view().all_items() == []

    pool.run(FAST)
    view = session.view()
    assert [i.id for i in view.minimized] == ["a-w0"]
    assert [i.id for i in view.active] == ["a-w1"]


def test_fast_result_is_written_to_cache(switcher: Switcher, fake_os: FakeOS) -> None:
    fake_os.apps = _apps_payload(make_app("a", titles=["w0"]))
    session, pool, _ = _session(switcher)
    session.start()
    pool.run(FAST)
    assert [app.bundle_id for app in switcher.get_cached_running_apps()] == ["a"]


def test_empty_fast_result_keeps_previous_snapshot(switcher: Switcher, fake_os: FakeOS) -> None:
    switcher.cache.set([make_app("cached", titles=["w"])])
    fake_os.fast_ok = False
    session, pool, _ = _session(switcher)
    session.start()
    pool.run(FAST)
    assert [i.bundle_id for i in session.view().all_items()] == ["cached"]


def test_superseded_results_are_ignored(switcher: Switcher, fake_os: FakeOS) -> None:
    session, pool, _ = _session(switcher)
    fake_os.apps = _apps_payload(make_app("old", titles=["w"]))
    fake_os.states = {"old": [True]}
    session.start()
    # Capture the old generation's answers before the OS state changes
    old_fast, old_slow = pool.calls[FAST], pool.calls[SLOW]
    old_apps_value = old_fast[0]()
    old_states_value = old_slow[0]()

    fake_os.apps = _apps_payload(make_app("new", titles=["w"]))
    fake_os.states = {"new": [False]}
    session.refresh()
    pool.run(2)
    pool.run(3)

    # The first generation finishes last and must not win
    old_fast[1].set_result(old_apps_value)
    old_slow[1].set_result(old_states_value)

    view = session.view()
    assert [i.bundle_id for i in view.all_items()] == ["new"]
    assert view.minimized == []


def test_older_slow_result_is_used_until_a_newer_one_arrives(switcher: Switcher, fake_os: FakeOS) -> None:
    fake_os.apps = _apps_payload(make_app("a", titles=["w0"]))
    fake_os.states = {"a": [True]}
    session, pool, _ = _session(switcher)
    session.start()
    pool.run(FAST)
    pool.run(SLOW)

    session.refresh()
    pool.run(2)  # newer fast result only
    assert [i.id for i in session.view().minimized] == ["a-w0"]


def test_exclusions_apply_on_every_view(switcher: Switcher, fake_os: FakeOS) -> None:
    fake_os.apps = _apps_payload(make_app("a", titles=["w"]), make_app("b", titles=["w"]))
    session, pool, _ = _session(switcher)
    session.start()
    pool.run_all()
    switcher.add_excluded_app("a")
    assert [i.bundle_id for i in session.view().all_items()] == ["b"]


def test_order_is_normalized(switcher: Switcher) -> None:
    session, _, _ = _session(switcher, order="sideways")
    assert session.order == "most-recent"


def test_non_switch_action_refreshes(switcher: Switcher, fake_os: FakeOS) -> None:
    fake_os.apps = _apps_payload(make_app("a", titles=["w0"]))
    session, pool, _ = _session(switcher)
    session.start()
    pool.run_all()

    item = session.view().active[0]
    result, should_close = session.perform("minimize", item)
    assert result.success is True
    assert should_close is False
    assert len(pool.calls) == 4


def test_switch_closes_without_refresh(switcher: Switcher, fake_os: FakeOS) -> None:
    fake_os.apps = _apps_payload(make_app("a", titles=["w0"]))
    session, pool, _ = _session(switcher)
    session.start()
    pool.run_all()

    result, should_close = session.perform("switch", session.view().active[0])
    assert result.success is True
    assert should_close is True
    assert len(pool.calls) == 2


def test_failed_action_neither_closes_nor_refreshes(switcher: Switcher, executor) -> None:
    from window_switcher.exceptions import AppleScriptError

    executor.execute_or_raise.side_effect = AppleScriptError("nope")
    session, pool, _ = _session(switcher)
    result, should_close = session.perform("quit", {"appName": "Notes", "bundleId": "com.apple.Notes"})
    assert result.success is False
    assert result.error == "nope"
    assert should_close is False
    assert pool.calls == []


def test_wait_returns_once_queries_finish(switcher: Switcher) -> None:
    session, pool, _ = _session(switcher)
    session.start()
    assert session.wait(timeout=0) is False
    pool.run_all()
    assert session.wait(timeout=0) is True


def test_superseded_fast_result_does_not_reach_the_cache(switcher: Switcher, fake_os: FakeOS, storage) -> None:
    from window_switcher.cache import RunningAppsCache

    fake_os.apps = _apps_payload(make_app("old", titles=["w"]))
    session, pool, _ = _session(switcher)
    session.start()
    old_fn, old_future = pool.calls[FAST]
    old_apps = old_fn()

    fake_os.apps = _apps_payload(make_app("new", titles=["w"]))
    session.refresh()
    pool.run(2)
    old_future.set_result(old_apps)

    assert [app.bundle_id for app in switcher.get_cached_running_apps()] == ["new"]
    on_disk = RunningAppsCache(storage, ttl=20).get()
    assert [app.bundle_id for app in on_disk] == ["new"]


def test_fast_query_in_worker_does_not_write_the_cache(switcher: Switcher, fake_os: FakeOS) -> None:
    fake_os.apps = _apps_payload(make_app("a", titles=["w"]))
    session, pool, _ = _session(switcher)
    session.start()
    fn, _ = pool.calls[FAST]
    fn()
    assert switcher.get_cached_running_apps() is None


def test_view_order_override_leaves_session_order(switcher: Switcher, fake_os: FakeOS) -> None:
    fake_os.apps = _apps_payload(
        make_app("z", name="Zed", frontmost=True, titles=["w"]),
        make_app("a", name="Ant", titles=["w"]),
    )
    session, pool, _ = _session(switcher)
    session.start()
    pool.run_all()
    assert [i.bundle_id for i in session.view("alphabetical").active] == ["a", "z"]
    assert [i.bundle_id for i in session.view().active] == ["z", "a"]
    assert session.order == "most-recent"
