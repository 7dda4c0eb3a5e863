"""Unit tests for the route gate and navigation."""

import uuid

import pytest

from alloggiati.auth.context import UserContext
from alloggiati.auth.permissions import Resource, can_access, navigation_for, redirect_for

USER = UserContext(user_id=uuid.uuid4(), role="user")
ADMIN = UserContext(user_id=uuid.uuid4(), role="admin")


class TestCanAccess:
    @pytest.mark.parametrize("resource", list(Resource))
    def test_signed_out_is_denied_everything(self, resource):
        assert can_access(None, resource) is False

    @pytest.mark.parametrize("resource", list(Resource))
    def test_admin_may_open_everything(self, resource):
        assert can_access(ADMIN, resource) is True

    @pytest.mark.parametrize(
        "resource",
        [Resource.REGISTER, Resource.REVIEW, Resource.EDIT_GUEST, Resource.SUBMISSIONS],
    )
    def test_user_may_open_workflow_views(self, resource):
        assert can_access(USER, resource) is True

    def test_user_cannot_open_dashboard(self):
        assert can_access(USER, Resource.DASHBOARD) is False


class TestRedirectFor:
    def test_signed_out_goes_to_login(self):
        assert redirect_for(None) == "/login"

    def test_signed_in_goes_home(self):
        assert redirect_for(USER) == "/register"
        assert redirect_for(ADMIN) == "/register"


class TestNavigation:
    def test_empty_when_signed_out(self):
        assert navigation_for(None) == []

    def test_user_menu_hides_dashboard(self):
        paths = [item["path"] for item in navigation_for(USER)]
        assert paths == ["/register", "/review", "/submissions", "/logout"]

    def test_admin_menu_includes_dashboard_before_logout(self):
        items = navigation_for(ADMIN)
        assert [item["resource"] for item in items] == ["register", "review", "submissions", "dashboard", "logout"]
        assert items[-2]["label"] == "Dashboard"


class TestUserContext:
    def test_is_admin(self):
        assert ADMIN.is_admin is True
        assert USER.is_admin is False
