"""Role, user and project value objects.

These are Pydantic models used by the resolver. They are immutable once
loaded and adapt the shapes the role store hands out (``nom``,
``visibleMenus``, ``role_id``, ``chef_projet``, ``membres`` ...).

Role maps are normalized on construction: every enumerated key is present,
and only the boolean ``True`` survives as a grant. Any other stored value
(``None``, ``"yes"``, ``1``, a nested object) becomes ``False``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import ALL_MENUS, ALL_PERMISSIONS

logger = logging.getLogger(__name__)


def explicit_flags(source: Any, keys: tuple[Any, ...]) -> dict[str, bool]:
    """Build an exhaustive ``{wire_name: bool}`` map over ``keys``.

    Missing or non-mapping ``source`` yields all-False. Unknown source keys
    are dropped.
    """
    if not isinstance(source, Mapping):
        return {key.value: False for key in keys}

    flags = {key.value: source.get(key.value) is True for key in keys}
    unknown = set(source) - set(flags)
    if unknown:
        logger.debug("Dropping unknown role keys: %s", sorted(map(str, unknown)))
    return flags


class Role(BaseModel):
    """A named bundle of permission grants and menu visibility.

    Used for both system roles (global) and project roles
    (``project_id`` set).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: Optional[str] = None
    name: str = Field(default="", alias="nom")
    description: str = ""
    project_id: Optional[str] = None
    is_custom: bool = False
    is_predefined: bool = False
    permissions: dict[str, bool] = Field(default_factory=dict, validate_default=True)
    visible_menus: dict[str, bool] = Field(default_factory=dict, alias="visibleMenus", validate_default=True)

    @field_validator("permissions", mode="before")
    @classmethod
    def normalize_permissions(cls, v: Any) -> dict[str, bool]:
        return explicit_flags(v, ALL_PERMISSIONS)

    @field_validator("visible_menus", mode="before")
    @classmethod
    def normalize_menus(cls, v: Any) -> dict[str, bool]:
        return explicit_flags(v, ALL_MENUS)

    @field_validator("id", "project_id", mode="before")
    @classmethod
    def stringify_identifier(cls, v: Any) -> Optional[str]:
        return None if v is None else str(v)

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "Role":
        """Adapt a role document from the store.

        Missing ``permissions`` / ``visibleMenus`` fields resolve to all-False
        maps rather than an error.
        """
        return cls(
            id=doc.get("_id", doc.get("id")),
            name=doc.get("nom", doc.get("name", "")) or "",
            description=doc.get("description") or "",
            project_id=doc.get("project_id"),
            is_custom=doc.get("is_custom") is True,
            is_predefined=doc.get("is_predefined") is True,
            permissions=doc.get("permissions"),
            visible_menus=doc.get("visibleMenus", doc.get("visible_menus")),
        )

    def granted(self) -> tuple[str, ...]:
        """Wire names of the permissions this role grants."""
        return tuple(key for key, allowed in self.permissions.items() if allowed)


class User(BaseModel):
    """An account with an optional system role."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    role: Optional[Role] = None

    @field_validator("id", mode="before")
    @classmethod
    def stringify_identifier(cls, v: Any) -> Optional[str]:
        return None if v is None else str(v)

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "User":
        """Adapt a user document.

        Accepts the populated back-end shape (``role_id``) as well as the
        front-end shape (``role``). A role that is not a populated document
        (e.g. a bare id) counts as no role.
        """
        raw_role = doc.get("role_id")
        if raw_role is None:
            raw_role = doc.get("role")
        if isinstance(raw_role, Role):
            role = raw_role
        elif isinstance(raw_role, Mapping):
            role = Role.from_document(raw_role)
        else:
            role = None
        return cls(id=doc.get("_id", doc.get("id")), role=role)


class ProjectMember(BaseModel):
    """A membership entry: who, and under which project role name."""

    model_config = ConfigDict(frozen=True)

    user_id: Optional[str] = None
    project_role: Optional[str] = None

    @field_validator("user_id", mode="before")
    @classmethod
    def stringify_identifier(cls, v: Any) -> Optional[str]:
        return None if v is None else str(v)


class Project(BaseModel):
    """The membership-relevant slice of a project."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    lead_id: Optional[str] = None
    product_owner_id: Optional[str] = None
    members: tuple[ProjectMember, ...] = ()

    @field_validator("id", "lead_id", "product_owner_id", mode="before")
    @classmethod
    def stringify_identifier(cls, v: Any) -> Optional[str]:
        return None if v is None else str(v)

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "Project":
        """Adapt a project document (``chef_projet``, ``product_owner``, ``membres``)."""
        members = []
        for entry in doc.get("membres") or ():
            if isinstance(entry, Mapping):
                members.append(
                    ProjectMember(
                        user_id=entry.get("user_id"),
                        project_role=entry.get("rôle_projet", entry.get("project_role")),
                    )
                )
        return cls(
            id=doc.get("_id", doc.get("id")),
            lead_id=doc.get("chef_projet"),
            product_owner_id=doc.get("product_owner"),
            members=tuple(members),
        )

    def member(self, user_id: str) -> Optional[ProjectMember]:
        """The membership entry for ``user_id``, if any."""
        for entry in self.members:
            if entry.user_id is not None and entry.user_id == str(user_id):
                return entry
        return None


__all__ = [
    "Project",
    "ProjectMember",
    "Role",
    "User",
    "explicit_flags",
]
