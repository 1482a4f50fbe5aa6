"""Read-only snapshots of host metadata handed to the enrichers.

:class:`Operation` describes one registered endpoint. :class:`MemberInfo`
and :class:`MethodInfo` are the reflective descriptors produced by a
:class:`~introspec.host.metadata.MetadataSource` for DTO members and
service methods.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from introspec.host.attributes import Restrict

ANY_VERB = "ANY"
"""Wildcard action meaning "every verb"."""


def type_full_name(target: type) -> str:
    """Return ``module.QualifiedName`` for *target*."""
    return f"{target.__module__}.{target.__qualname__}"


@dataclass(frozen=True)
class Operation:
    """Metadata snapshot of one API endpoint.

    Attributes:
        request_type: The request DTO class.
        response_type: The response DTO class, or ``None`` for operations
            without a typed response.
        actions: Declared verbs; ``("ANY",)`` accepts every verb.
        service_type: Class implementing the operation.
        requires_authentication: Whether callers must be authenticated.
        required_roles: Roles that are all required.
        requires_any_role: Roles of which at least one is required.
        required_permissions: Permissions that are all required.
        requires_any_permission: Permissions of which at least one is required.
        restrict_to: Format restriction, from the DTO or the service.
        is_one_way: Explicit fire-and-forget flag.
    """

    request_type: Optional[type] = None
    response_type: Optional[type] = None
    actions: tuple[str, ...] = ()
    service_type: Optional[type] = None
    requires_authentication: bool = False
    required_roles: tuple[str, ...] = ()
    requires_any_role: tuple[str, ...] = ()
    required_permissions: tuple[str, ...] = ()
    requires_any_permission: tuple[str, ...] = ()
    restrict_to: Optional[Restrict] = None
    is_one_way: bool = False

    @property
    def name(self) -> str:
        """Simple name of the request DTO (``""`` when unknown)."""
        return self.request_type.__name__ if self.request_type is not None else ""


@dataclass(frozen=True)
class MemberInfo:
    """A field or property declared on a DTO."""

    declaring_type: type
    name: str
    annotation: Any = None
    metadata: tuple[Any, ...] = ()

    @property
    def full_name(self) -> str:
        """Stable identity used as a cache key: ``module.Type.member``."""
        return f"{type_full_name(self.declaring_type)}.{self.name}"

    @property
    def type_name(self) -> Optional[str]:
        """Readable name of the member's annotation."""
        if self.annotation is None:
            return None
        if isinstance(self.annotation, type):
            return self.annotation.__name__
        return str(self.annotation).replace("typing.", "")


@dataclass(frozen=True)
class MethodInfo:
    """A public instance method declared on a service class."""

    name: str
    parameter_types: tuple[Any, ...] = ()
    returns_none: bool = False
