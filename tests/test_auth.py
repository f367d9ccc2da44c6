"""Tests for the session route gate."""

import pydantic
import pytest

from auth import Session, resolve_route, route_for


class TestResolveRoute:

    @pytest.mark.parametrize("path", ["/dashboard", "/problems", "/profile/codeforces", "/settings"])
    def test_protected_routes_need_session(self, path) -> None:
        assert resolve_route(path, has_session=False) == "/auth/login"
        assert resolve_route(path, has_session=True) is None

    @pytest.mark.parametrize("path", ["/auth/login", "/auth/signup"])
    def test_auth_routes_redirect_signed_in_users(self, path) -> None:
        assert resolve_route(path, has_session=True) == "/dashboard"
        assert resolve_route(path, has_session=False) is None

    def test_public_routes_pass_through(self) -> None:
        assert resolve_route("/", has_session=False) is None
        assert resolve_route("/auth/verify", has_session=True) is None

    def test_prefix_must_end_at_segment(self) -> None:
        assert resolve_route("/dashboards", has_session=False) is None


class TestSession:

    def test_route_for(self) -> None:
        assert route_for("/problems", None) == "/auth/login"
        assert route_for("/problems", Session(username="tourist")) == "/problems"

    def test_username_required(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            Session(username="")
