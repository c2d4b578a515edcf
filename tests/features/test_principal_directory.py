"""Tests for the principal and group directory."""

import pytest

from neo_rbac import AuditEmitter, Group, GroupNotFoundError, PrincipalNotFoundError, Service, User
from neo_rbac.config.constants import AuditEventType, PrincipalKind
from neo_rbac.features.principals import PrincipalDirectory


@pytest.fixture
def directory(recorder):
    return PrincipalDirectory(AuditEmitter([recorder]))


def ids(groups):
    return {group.id for group in groups}


class TestPrincipals:
    """Test cases for principal lifecycle."""

    def test_kinds(self):
        assert User(id="u", username="alice").kind is PrincipalKind.USER
        assert Service(id="s").kind is PrincipalKind.SERVICE
        assert Group(id="g", name="G").is_group

    def test_add_and_get(self, directory, recorder):
        user = User(id="u1", username="alice")
        directory.add_principal(user)

        assert "u1" in directory
        assert directory.get_principal("u1") is user
        assert directory.get_user("u1") is user
        assert recorder.of_type(AuditEventType.PRINCIPAL_ADDITION)[0]["principal"] is user

    def test_get_user_ignores_non_users(self, directory):
        directory.add_principal(Service(id="svc", name="billing"))

        assert directory.get_user("svc") is None
        assert directory.get_user("missing") is None

    def test_remove(self, directory, recorder):
        directory.add_principal(User(id="u1", username="alice"))

        assert directory.remove_principal("u1") is True
        assert directory.remove_principal("u1") is False
        assert len(recorder.of_type(AuditEventType.PRINCIPAL_REMOVAL)) == 1

    def test_remove_does_not_cascade_into_groups(self, directory):
        directory.add_principal(User(id="u1", username="alice"))
        group = directory.create_group("g1", "Group 1")
        directory.add_to_group("g1", "u1")

        directory.remove_principal("u1")

        assert "u1" in group.members
        assert ids(directory.get_groups_member_of("u1")) == {"g1"}

    def test_added_group_principal_is_a_group(self, directory):
        directory.add_principal(Group(id="g9", name="Imported"))
        assert directory.get_group("g9") is not None


class TestGroups:
    """Test cases for membership and nesting."""

    def test_create_group_registers_principal(self, directory, recorder):
        group = directory.create_group("g1", "Group 1")

        assert directory.get_principal("g1") is group
        assert group.members == set()
        assert group.subgroups == set()
        event = recorder.of_type(AuditEventType.GROUP_CREATION)[0]
        assert (event["group_id"], event["name"]) == ("g1", "Group 1")

    def test_add_to_missing_group(self, directory):
        directory.add_principal(User(id="u1", username="alice"))
        with pytest.raises(GroupNotFoundError):
            directory.add_to_group("nope", "u1")

    def test_add_missing_principal(self, directory):
        group = directory.create_group("g1", "Group 1")
        with pytest.raises(PrincipalNotFoundError):
            directory.add_to_group("g1", "ghost")
        assert group.members == set()

    def test_group_principal_becomes_subgroup(self, directory, recorder):
        parent = directory.create_group("parent", "Parent")
        directory.create_group("child", "Child")

        directory.add_to_group("parent", "child")

        assert parent.subgroups == {"child"}
        assert parent.members == set()
        assert recorder.of_type(AuditEventType.GROUP_ADDITION)[0]["principal_id"] == "child"

    def test_add_subgroup_requires_both_groups(self, directory):
        directory.create_group("parent", "Parent")
        directory.add_principal(User(id="u1", username="alice"))

        with pytest.raises(GroupNotFoundError, match="Both parent and child groups must exist"):
            directory.add_subgroup("parent", "u1")
        with pytest.raises(GroupNotFoundError):
            directory.add_subgroup("missing", "parent")

    def test_remove_from_group(self, directory, recorder):
        directory.add_principal(User(id="u1", username="alice"))
        group = directory.create_group("g1", "Group 1")
        directory.add_to_group("g1", "u1")

        assert directory.remove_from_group("g1", "u1") is True
        assert group.members == set()
        assert directory.remove_from_group("g1", "u1") is False
        assert directory.remove_from_group("missing", "u1") is False
        assert len(recorder.of_type(AuditEventType.GROUP_REMOVAL)) == 1

    def test_remove_subgroup_link(self, directory):
        parent = directory.create_group("parent", "Parent")
        directory.create_group("child", "Child")
        directory.add_subgroup("parent", "child")

        assert directory.remove_from_group("parent", "child") is True
        assert parent.subgroups == set()


class TestGroupAncestry:
    """Test cases for transitive group membership."""

    def test_member_of_nested_groups(self, directory):
        for group_id in ("a", "b", "c"):
            directory.create_group(group_id, group_id.upper())
        directory.add_subgroup("a", "b")
        directory.add_subgroup("b", "c")
        directory.add_principal(User(id="u1", username="alice"))
        directory.add_to_group("c", "u1")

        assert ids(directory.get_groups_member_of("u1")) == {"a", "b", "c"}
        assert ids(directory.get_groups_member_of("c")) == {"a", "b"}
        assert ids(directory.get_parent_groups("u1")) == {"c"}

    def test_cyclic_subgroups_terminate(self, directory):
        directory.create_group("a", "A")
        directory.create_group("b", "B")
        directory.add_subgroup("a", "b")
        directory.add_subgroup("b", "a")

        assert ids(directory.get_groups_member_of("a")) == {"a", "b"}

    def test_not_a_member(self, directory):
        directory.create_group("a", "A")
        assert directory.get_groups_member_of("stranger") == []
