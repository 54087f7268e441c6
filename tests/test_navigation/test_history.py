"""Tests for params_router.history — entries, traversal, listeners."""

import pytest

from params_router.history import Action, MemoryHistory
from params_router.location import Location


class TestMemoryHistory:
    def test_initial_location(self) -> None:
        history = MemoryHistory()
        assert history.location.pathname == "/"
        assert history.action is Action.POP

    def test_initial_entries_and_index(self) -> None:
        history = MemoryHistory(["/a", "/b", "/c"], initial_index=1)
        assert history.location.pathname == "/b"
        assert history.index == 1

    def test_initial_index_is_clamped(self) -> None:
        history = MemoryHistory(["/a", "/b"], initial_index=10)
        assert history.location.pathname == "/b"

    def test_accepts_locations(self) -> None:
        history = MemoryHistory([Location("/x", "q=1")])
        assert history.location.search == "q=1"

    def test_push(self) -> None:
        history = MemoryHistory()
        history.push("/users/1?tab=a")
        assert history.location.pathname == "/users/1"
        assert history.location.search == "tab=a"
        assert history.action is Action.PUSH
        assert len(history.entries) == 2

    def test_push_with_state(self) -> None:
        history = MemoryHistory()
        history.push("/x", state={"modal": True})
        assert history.location.state == {"modal": True}

    def test_replace(self) -> None:
        history = MemoryHistory(["/a"])
        history.replace("/b")
        assert history.location.pathname == "/b"
        assert history.action is Action.REPLACE
        assert len(history.entries) == 1

    def test_back_and_forward(self) -> None:
        history = MemoryHistory(["/a"])
        history.push("/b")
        history.back()
        assert history.location.pathname == "/a"
        assert history.action is Action.POP
        history.forward()
        assert history.location.pathname == "/b"

    def test_push_drops_forward_entries(self) -> None:
        history = MemoryHistory(["/a", "/b", "/c"])
        history.go(-2)
        history.push("/d")
        assert [entry.pathname for entry in history.entries] == ["/a", "/d"]

    def test_each_entry_gets_a_key(self) -> None:
        history = MemoryHistory()
        history.push("/a")
        history.push("/a")
        first, second = history.entries[1:]
        assert first.key != second.key


class TestListeners:
    def test_listener_receives_location(self) -> None:
        history = MemoryHistory()
        seen: list[str] = []
        history.listen(lambda location: seen.append(location.pathname))
        history.push("/a")
        history.replace("/b")
        assert seen == ["/a", "/b"]

    def test_unlisten(self) -> None:
        history = MemoryHistory()
        seen: list[str] = []
        unlisten = history.listen(lambda location: seen.append(location.pathname))
        history.push("/a")
        unlisten()
        unlisten()
        history.push("/b")
        assert seen == ["/a"]

    def test_go_without_moving_does_not_notify(self) -> None:
        history = MemoryHistory(["/a"])
        seen: list[str] = []
        history.listen(lambda location: seen.append(location.pathname))
        history.back()
        history.go(5)
        assert seen == []

    def test_unlisten_from_inside_a_listener(self) -> None:
        history = MemoryHistory()
        seen: list[str] = []
        unlisten_second = None

        def first(location: Location) -> None:
            seen.append("first")
            unlisten_second()

        history.listen(first)
        unlisten_second = history.listen(lambda location: seen.append("second"))
        history.push("/a")
        assert seen == ["first"]

    def test_navigation_from_listener_keeps_order(self) -> None:
        history = MemoryHistory()
        seen: list[str] = []

        def redirect(location: Location) -> None:
            if location.pathname == "/a":
                history.push("/b")

        history.listen(redirect)
        history.listen(lambda location: seen.append(location.pathname))
        history.push("/a")
        assert seen == ["/a", "/b"]
        assert history.location.pathname == "/b"

    def test_failing_listener_does_not_drop_queued_locations(self) -> None:
        history = MemoryHistory()
        seen: list[str] = []

        def redirect(location: Location) -> None:
            if location.pathname == "/a":
                history.push("/b")

        def fail(location: Location) -> None:
            if location.pathname == "/a":
                raise RuntimeError("listener failed")

        history.listen(redirect)
        history.listen(fail)
        history.listen(lambda location: seen.append(location.pathname))

        with pytest.raises(RuntimeError):
            history.push("/a")
        assert history.location.pathname == "/b"
        assert seen == []

        history.push("/c")
        assert seen == ["/b", "/c"]
