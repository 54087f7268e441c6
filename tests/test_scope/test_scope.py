"""Tests for params_router.scope — pattern composition and scope derivation."""

from typing import Any

import pytest

from params_router.exceptions import DestinationError
from params_router.location import Location
from params_router.parsing import Params, build_url
from params_router.patterns import compile_pattern
from params_router.scope import ROOT_SCOPE, derive_scope, to_pattern


class TestToPattern:
    def test_string_passes_through(self) -> None:
        assert to_pattern("/users/:id") == "/users/:id"

    def test_params_list(self) -> None:
        assert to_pattern({"params": ["id", "tab"]}) == "(/:id)(/:tab)"

    def test_empty_params_list(self) -> None:
        assert to_pattern({"params": []}) == ""
        assert to_pattern({}) == ""


class TestDeriveScope:
    def test_nested_scope(self) -> None:
        location = Location.from_url("/admin/users/7?adminId=3")
        admin = derive_scope("/admin", None, location)
        users = derive_scope("/users/:userId", admin, location)

        assert users.params == {"userId": "7"}
        assert users.root_params == {}
        assert users.rest == ""
        assert users.all_params == {"userId": "7", "adminId": 3}
        assert users.own_pattern == "/users/:userId"
        assert users.root_pattern == "/admin/users/:userId"
        assert users.pattern == "/admin/users/:userId(*)"
        assert users.parent is admin

    def test_rest_is_left_for_descendants(self) -> None:
        location = Location.from_url("/admin/users/7")
        admin = derive_scope("/admin", None, location)
        assert admin.rest == "/users/7"
        assert admin.params == {}

    def test_root_params_come_from_ancestors(self) -> None:
        location = Location.from_url("/admin/3/users/7")
        admin = derive_scope("/admin/:adminId", None, location)
        users = derive_scope("/users/:userId", admin, location)

        assert admin.params == {"adminId": "3"}
        assert admin.root_params == {}
        assert users.params == {"userId": "7"}
        assert users.root_params == {"adminId": "3"}

    def test_full_match_is_params_plus_root_params(self) -> None:
        location = Location.from_url("/org/acme/projects/p1/files/a/b")
        org = derive_scope("/org/:orgId", None, location)
        projects = derive_scope("/projects/:projectId", org, location)
        files = derive_scope("/files", projects, location)

        full = compile_pattern(files.pattern).match("/org/acme/projects/p1/files/a/b")
        assert full is not None
        full.pop("_")
        assert full == {**files.root_params, **files.params}
        assert files.root_params == {"orgId": "acme", "projectId": "p1"}
        assert files.rest == "/a/b"

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("/", {}),
            ("/7", {"id": "7"}),
            ("/7/profile", {"id": "7", "tab": "profile"}),
        ],
    )
    def test_params_list_matches_partial_paths(self, url: str, expected: dict) -> None:
        scope = derive_scope({"params": ["id", "tab"]}, None, Location.from_url(url))
        assert scope.params == expected
        assert scope.rest == ""

    def test_no_match_gives_empty_params(self) -> None:
        scope = derive_scope("/users/:id", None, Location.from_url("/other"))
        assert scope.params == {}
        assert scope.rest == ""

    def test_derivation_is_repeatable(self) -> None:
        location = Location.from_url("/users/1?tab=a")
        first = derive_scope("/users/:id", ROOT_SCOPE, location)
        second = derive_scope("/users/:id", ROOT_SCOPE, location)
        assert first == second
        assert first is not second


class TestGoTo:
    def test_merges_ancestor_params(self, recorder: Any) -> None:
        location = Location.from_url("/admin/3/users/7")
        admin = derive_scope("/admin/:adminId", None, location, navigate=recorder)
        users = derive_scope("/users/:userId", admin, location, navigate=recorder)

        users.go_to({"userId": 9})

        destination, options = recorder.last
        assert destination == Params({"adminId": "3", "userId": 9})
        assert options == {"pattern": users.pattern, "replace": False}
        assert build_url(destination, users.pattern) == "/admin/3/users/9"

    def test_destination_overrides_ancestor_params(self, recorder: Any) -> None:
        location = Location.from_url("/admin/3/users/7")
        admin = derive_scope("/admin/:adminId", None, location)
        users = derive_scope("/users/:userId", admin, location, navigate=recorder)

        users.go_to({"adminId": "4", "userId": 1}, replace=True)

        destination, options = recorder.last
        assert destination == Params({"adminId": "4", "userId": 1})
        assert options["replace"] is True

    def test_literal_is_not_merged(self, recorder: Any) -> None:
        scope = derive_scope("/users/:id", None, Location(), navigate=recorder)
        scope.go_to("/elsewhere")
        assert recorder.last[0].url == "/elsewhere"

    def test_requires_navigator(self) -> None:
        scope = derive_scope("/users/:id", None, Location())
        with pytest.raises(DestinationError):
            scope.go_to({"id": 1})


class TestHref:
    @pytest.fixture
    def users(self) -> Any:
        location = Location.from_url("/admin/3/users/7?page=2")
        admin = derive_scope("/admin/:adminId", None, location)
        return derive_scope("/users/:userId", admin, location)

    def test_literal(self, users: Any) -> None:
        assert users.href("https://example.com") == "https://example.com"

    def test_params(self, users: Any) -> None:
        assert users.href({"userId": 5}) == "/admin/3/users/5"

    def test_params_with_query(self, users: Any) -> None:
        assert users.href({"userId": 5, "sort": "asc"}) == "/admin/3/users/5?sort=asc"

    def test_updater_sees_every_param(self, users: Any) -> None:
        url = users.href(lambda params: {**params, "sort": "asc"})
        assert url == "/admin/3/users/7?page=2&sort=asc"
