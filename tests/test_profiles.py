"""Tests for role defaults, predefined project roles and role audits."""

from __future__ import annotations

import pytest

from projectguard import (
    ALL_MENUS,
    ALL_PERMISSIONS,
    DEFAULT_PERMISSIONS,
    DEFAULT_VISIBLE_MENUS,
    PROJECT_ROLE_PROFILES,
    InvalidKeyError,
    MenuKey,
    PermissionKey,
    audit_role_document,
    build_role,
)


class TestDefaults:
    """Tests for new-role defaults."""

    def test_defaults_are_exhaustive(self) -> None:
        """Defaults set an explicit boolean for every key."""
        assert set(DEFAULT_PERMISSIONS) == {key.value for key in ALL_PERMISSIONS}
        assert set(DEFAULT_VISIBLE_MENUS) == {key.value for key in ALL_MENUS}
        assert all(isinstance(v, bool) for v in DEFAULT_PERMISSIONS.values())

    def test_default_permissions(self) -> None:
        """New roles get self-service basics, no administration."""
        granted = {key for key, allowed in DEFAULT_PERMISSIONS.items() if allowed}
        assert granted == {
            "voirSesProjets",
            "deplacerTaches",
            "saisirTemps",
            "gererFichiers",
            "commenter",
            "recevoirNotifications",
        }

    def test_admin_menu_hidden_by_default(self) -> None:
        """Only the admin section is hidden by default."""
        assert DEFAULT_VISIBLE_MENUS["admin"] is False
        assert sum(DEFAULT_VISIBLE_MENUS.values()) == len(ALL_MENUS) - 1

    def test_defaults_audit_clean(self) -> None:
        """A role built from the defaults passes the audit."""
        doc = {"permissions": DEFAULT_PERMISSIONS, "visibleMenus": DEFAULT_VISIBLE_MENUS}
        assert audit_role_document(doc).clean


class TestBuildRole:
    """Tests for build_role."""

    def test_grants_exactly(self) -> None:
        """Only listed keys are granted."""
        role = build_role("Dev", granted=[PermissionKey.MANAGE_TASKS, "commenter"], menus=["tasks"])
        assert set(role.granted()) == {"gererTaches", "commenter"}
        assert [k for k, v in role.visible_menus.items() if v] == ["tasks"]

    def test_rejects_unknown_keys(self) -> None:
        """Typos fail fast."""
        with pytest.raises(InvalidKeyError):
            build_role("Dev", granted=["gererTache"])
        with pytest.raises(InvalidKeyError):
            build_role("Dev", menus=["dashboard"])


class TestProjectRoleProfiles:
    """Tests for the predefined project roles."""

    def test_eight_unique_profiles(self) -> None:
        """There are eight predefined roles with unique names."""
        names = [profile.name for profile in PROJECT_ROLE_PROFILES]
        assert len(names) == 8
        assert len(set(names)) == 8

    def test_no_profile_is_global(self) -> None:
        """No project role carries global or administrative capabilities."""
        global_keys = {
            PermissionKey.VIEW_ALL_PROJECTS,
            PermissionKey.CREATE_PROJECT,
            PermissionKey.DELETE_PROJECT,
            PermissionKey.MANAGE_USERS,
            PermissionKey.ADMIN_CONFIG,
        }
        for profile in PROJECT_ROLE_PROFILES:
            assert not profile.granted & global_keys, profile.name
            assert MenuKey.ADMIN not in profile.menus, profile.name

    def test_only_product_owner_validates(self) -> None:
        """Deliverable validation belongs to the Product Owner."""
        validators = [p.name for p in PROJECT_ROLE_PROFILES if PermissionKey.VALIDATE_DELIVERABLE in p.granted]
        assert validators == ["Product Owner"]

    def test_project_lead_profile(self) -> None:
        """The project lead manages members, sprints and budget."""
        lead = next(p for p in PROJECT_ROLE_PROFILES if p.name == "Chef de Projet")
        assert PermissionKey.MANAGE_PROJECT_MEMBERS in lead.granted
        assert PermissionKey.MANAGE_SPRINTS in lead.granted
        assert PermissionKey.MODIFY_BUDGET in lead.granted

    def test_stakeholder_is_read_only(self) -> None:
        """Stakeholders can only follow and comment."""
        stakeholder = next(p for p in PROJECT_ROLE_PROFILES if p.name == "Partie Prenante")
        assert stakeholder.granted == {
            PermissionKey.VIEW_OWN_PROJECTS,
            PermissionKey.COMMENT,
            PermissionKey.RECEIVE_NOTIFICATIONS,
        }

    def test_auditor_sees_audit_not_portfolio(self) -> None:
        auditor = next(p for p in PROJECT_ROLE_PROFILES if p.name == "Auditeur")
        assert PermissionKey.VIEW_AUDIT in auditor.granted
        assert MenuKey.PORTFOLIO not in auditor.menus

    def test_to_role(self) -> None:
        """Profiles materialize as predefined project roles."""
        role = PROJECT_ROLE_PROFILES[0].to_role("p1")
        assert role.project_id == "p1"
        assert role.is_predefined is True
        assert role.name == "Chef de Projet"
        assert audit_role_document({"permissions": role.permissions, "visibleMenus": role.visible_menus}).clean


class TestAuditRoleDocument:
    """Tests for audit_role_document."""

    def test_missing_sections(self) -> None:
        """A document with no maps is missing every key."""
        audit = audit_role_document({"nom": "Legacy"})
        assert len(audit.missing_permissions) == len(ALL_PERMISSIONS)
        assert len(audit.missing_menus) == len(ALL_MENUS)
        assert not audit.clean

    def test_missing_new_key(self) -> None:
        """A role predating a key is reported for that key only."""
        permissions = dict(DEFAULT_PERMISSIONS)
        del permissions["validerLivrable"]
        audit = audit_role_document({"permissions": permissions, "visibleMenus": DEFAULT_VISIBLE_MENUS})
        assert audit.missing_permissions == ("validerLivrable",)
        assert audit.missing_menus == ()

    def test_non_boolean_values(self) -> None:
        """Non-boolean stored values are reported with their section."""
        permissions = dict(DEFAULT_PERMISSIONS, adminConfig="false")
        menus = dict(DEFAULT_VISIBLE_MENUS, budget=1)
        audit = audit_role_document({"permissions": permissions, "visibleMenus": menus})
        assert audit.non_boolean == ("permissions.adminConfig", "visibleMenus.budget")
