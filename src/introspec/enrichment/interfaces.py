"""Capability interfaces an enricher may implement.

A metadata source implements any subset of the four ABCs below. Managers
never assume a capability: they call :func:`as_capability` and treat a
missing capability as "no data" for every field it would have supplied.

Every method returns ``None`` when the source has nothing to say; that is
never an error.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional, TypeVar

from introspec.host.operation import MemberInfo, Operation
from introspec.models import ApiSecurity, PropertyConstraint, StatusCode

C = TypeVar("C")


def as_capability(source: Any, capability: type[C]) -> Optional[C]:  # noqa: ANN401
    """Return *source* if it implements *capability*, otherwise ``None``."""
    if source is not None and isinstance(source, capability):
        return source
    return None


class ResourceEnricher(ABC):
    """Supplies type-level documentation for a DTO."""

    @abstractmethod
    def get_title(self, type_: type) -> Optional[str]: ...

    @abstractmethod
    def get_description(self, type_: type) -> Optional[str]: ...

    @abstractmethod
    def get_notes(self, type_: type) -> Optional[str]: ...

    @abstractmethod
    def get_allow_multiple(self, type_: type) -> Optional[bool]: ...

    @abstractmethod
    def get_is_required(self, type_: type) -> Optional[bool]: ...


class RequestEnricher(ABC):
    """Supplies operation-scoped documentation."""

    @abstractmethod
    def get_verbs(self, operation: Operation) -> Optional[list[str]]: ...

    @abstractmethod
    def get_content_types(self, operation: Operation) -> Optional[list[str]]: ...

    @abstractmethod
    def get_status_codes(self, operation: Operation) -> Optional[list[StatusCode]]: ...

    @abstractmethod
    def get_relative_path(self, operation: Operation) -> Optional[str]: ...

    @abstractmethod
    def get_category(self, operation: Operation) -> Optional[str]: ...

    @abstractmethod
    def get_tags(self, operation: Operation) -> Optional[list[str]]: ...

    @abstractmethod
    def get_has_validator(self, type_: Optional[type]) -> Optional[bool]: ...


class PropertyEnricher(ABC):
    """Supplies documentation for a single DTO member."""

    @abstractmethod
    def get_property_title(self, member: MemberInfo) -> Optional[str]: ...

    @abstractmethod
    def get_property_description(self, member: MemberInfo) -> Optional[str]: ...

    @abstractmethod
    def get_param_type(self, member: MemberInfo) -> Optional[str]: ...

    @abstractmethod
    def get_property_allow_multiple(self, member: MemberInfo) -> Optional[bool]: ...

    @abstractmethod
    def get_property_is_required(self, member: MemberInfo) -> Optional[bool]: ...

    @abstractmethod
    def get_property_notes(self, member: MemberInfo) -> Optional[str]: ...

    @abstractmethod
    def get_external_links(self, member: MemberInfo) -> Optional[list[str]]: ...

    @abstractmethod
    def get_constraints(self, member: MemberInfo) -> Optional[PropertyConstraint]: ...


class SecurityEnricher(ABC):
    """Supplies authentication requirements of an operation."""

    @abstractmethod
    def get_security(self, operation: Operation) -> Optional[ApiSecurity]:
        """Return the security descriptor, or ``None`` if no authentication is required."""
        ...
