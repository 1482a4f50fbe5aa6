"""Enricher that reads the metadata markers attached to DTOs and services.

:class:`ReflectionEnricher` implements all four capabilities on top of a
:class:`~introspec.host.metadata.MetadataSource`:

* **Resources** -- title from the class name, description from ``@Api`` or
  the class docstring, notes from ``@Route``.
* **Requests** -- verbs (``ANY`` replaced by the configured verbs), content
  types (host formats filtered by ``Restrict`` and ``@Exclude``, plus
  ``@AddHeader``), status codes (204 for one-way operations, then every
  ``@ApiResponse``), relative path (``@Route`` or a synthesized
  predefined route), tags (``@Tag``) and the has-validator flag.
* **Properties** -- ``ApiMember`` and ``ApiAllowableValues`` markers. The
  ``ApiMember`` lookup is memoized per ``module.Type.member`` for the
  lifetime of the enricher.
* **Security** -- a protected descriptor built from the operation's roles
  and permissions when it requires authentication.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
import threading
from collections.abc import MutableMapping
from typing import Any, Optional

from pydantic import BaseModel

from introspec.enrichment.interfaces import (
    PropertyEnricher,
    RequestEnricher,
    ResourceEnricher,
    SecurityEnricher,
)
from introspec.enrichment.merge import distinct
from introspec.host.attributes import (
    AddHeader,
    Api,
    ApiAllowableValues,
    ApiMember,
    ApiResponse,
    Exclude,
    Feature,
    RequestAttributes,
    Restrict,
    Route,
    Tag,
    safe_parse,
)
from introspec.host.formats import get_mime_type, normalise_format, one_way_url, reply_url
from introspec.host.metadata import MetadataSource, ReflectionMetadataSource
from introspec.host.operation import ANY_VERB, MemberInfo, Operation
from introspec.models import (
    ApiSecurity,
    DocumenterSettings,
    ListConstraint,
    Permissions,
    PropertyConstraint,
    RangeConstraint,
    StatusCode,
)
from introspec.settings import resolve as active_settings

logger = logging.getLogger(__name__)

_MISSING = object()

NO_CONTENT = 204


class ReflectionEnricher(ResourceEnricher, RequestEnricher, PropertyEnricher, SecurityEnricher):
    """Enriches documentation from reflective metadata.

    The member cache is guarded by a lock, so one instance may be shared by
    concurrent generations.

    Args:
        metadata: Metadata source; defaults to a
            :class:`~introspec.host.metadata.ReflectionMetadataSource`.
        settings: Explicit settings; the active settings are used when ``None``.
        cache: Mapping used to memoize ``ApiMember`` lookups. Pass a
            bounded mapping to cap its size; defaults to an unbounded dict.
    """

    def __init__(
        self,
        metadata: Optional[MetadataSource] = None,
        settings: Optional[DocumenterSettings] = None,
        cache: Optional[MutableMapping[str, Any]] = None,
    ) -> None:
        self._metadata = metadata or ReflectionMetadataSource()
        self._settings = settings
        self._api_members: MutableMapping[str, Any] = cache if cache is not None else {}
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Resource capability
    # ------------------------------------------------------------------

    def get_title(self, type_: type) -> Optional[str]:
        return getattr(type_, "__name__", None)

    def get_description(self, type_: type) -> Optional[str]:
        api = self._metadata.first_attribute(type_, Api)
        if api is not None and api.description:
            return api.description
        return _own_docstring(type_)

    def get_notes(self, type_: type) -> Optional[str]:
        route = self._metadata.first_attribute(type_, Route)
        return route.notes if route is not None else None

    def get_allow_multiple(self, type_: type) -> Optional[bool]:
        return None

    def get_is_required(self, type_: type) -> Optional[bool]:
        return None

    # ------------------------------------------------------------------
    # Request capability
    # ------------------------------------------------------------------

    def get_verbs(self, operation: Operation) -> Optional[list[str]]:
        if ANY_VERB in operation.actions:
            return list(active_settings(self._settings).replacement_verbs)
        return list(operation.actions)

    def get_content_types(self, operation: Operation) -> Optional[list[str]]:
        request_type = operation.request_type
        restrict = operation.restrict_to or self._metadata.first_attribute(request_type, Restrict)
        exclude = self._metadata.first_attribute(request_type, Exclude)

        mime_types: list[str] = []
        for fmt in self._metadata.available_formats():
            name = normalise_format(fmt)

            request_attribute = safe_parse(RequestAttributes, name)
            if not _can_access(restrict, request_attribute):
                continue

            feature = safe_parse(Feature, name)
            if _has_access_to_feature(exclude, feature):
                mime_types.append(get_mime_type(name))

        add_header = self._metadata.first_attribute(request_type, AddHeader)
        if add_header is not None:
            content_type = add_header.content_type or add_header.default_content_type
            if content_type:
                mime_types.append(content_type)

        return distinct(mime_types)

    def get_status_codes(self, operation: Operation) -> Optional[list[StatusCode]]:
        codes: list[StatusCode] = []
        if self._has_one_way_method(operation):
            codes.append(StatusCode(code=NO_CONTENT))

        if operation.request_type is not None:
            for response in self._metadata.attributes(operation.request_type, ApiResponse):
                codes.append(StatusCode(code=response.status_code, description=response.description))

        return codes

    def get_relative_path(self, operation: Operation) -> Optional[str]:
        request_type = operation.request_type
        if request_type is None:
            return None

        # Only the first declared route is considered.
        route = self._metadata.first_attribute(request_type, Route)
        if route is not None and route.path and route.path.strip():
            return route.path

        fmt = active_settings(self._settings).route_format
        if operation.is_one_way:
            return one_way_url(request_type.__name__, fmt)
        return reply_url(request_type.__name__, fmt)

    def get_category(self, operation: Operation) -> Optional[str]:
        return None

    def get_tags(self, operation: Operation) -> Optional[list[str]]:
        if operation.request_type is None:
            return None
        tags = [t.name for t in self._metadata.attributes(operation.request_type, Tag)]
        return distinct(tags) or None

    def get_has_validator(self, type_: Optional[type]) -> Optional[bool]:
        if not (inspect.isclass(type_) and issubclass(type_, BaseModel)):
            return None
        decorators = type_.__pydantic_decorators__
        return bool(decorators.field_validators or decorators.model_validators)

    # ------------------------------------------------------------------
    # Property capability
    # ------------------------------------------------------------------

    def get_property_title(self, member: MemberInfo) -> Optional[str]:
        api_member = self._get_api_member(member)
        return api_member.name if api_member is not None else None

    def get_property_description(self, member: MemberInfo) -> Optional[str]:
        api_member = self._get_api_member(member)
        return api_member.description if api_member is not None else None

    def get_param_type(self, member: MemberInfo) -> Optional[str]:
        api_member = self._get_api_member(member)
        return api_member.parameter_type if api_member is not None else None

    def get_property_allow_multiple(self, member: MemberInfo) -> Optional[bool]:
        api_member = self._get_api_member(member)
        return api_member.allow_multiple if api_member is not None else None

    def get_property_is_required(self, member: MemberInfo) -> Optional[bool]:
        api_member = self._get_api_member(member)
        return api_member.is_required if api_member is not None else None

    def get_property_notes(self, member: MemberInfo) -> Optional[str]:
        return None

    def get_external_links(self, member: MemberInfo) -> Optional[list[str]]:
        return None

    def get_constraints(self, member: MemberInfo) -> Optional[PropertyConstraint]:
        allowable = self._metadata.first_member_attribute(member, ApiAllowableValues)
        if allowable is None:
            return None

        constraint: PropertyConstraint
        if allowable.type.upper() == "LIST":
            constraint = ListConstraint(name=allowable.name, values=tuple(allowable.values))
        else:
            constraint = RangeConstraint(name=allowable.name, min=allowable.min, max=allowable.max)

        logger.debug("Created %s constraint for property %s", allowable.type, member.name)
        return constraint

    # ------------------------------------------------------------------
    # Security capability
    # ------------------------------------------------------------------

    def get_security(self, operation: Operation) -> Optional[ApiSecurity]:
        if not operation.requires_authentication:
            return None

        return ApiSecurity(
            is_protected=True,
            roles=Permissions.create(operation.required_roles, operation.requires_any_role),
            permissions=Permissions.create(
                operation.required_permissions, operation.requires_any_permission
            ),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _has_one_way_method(self, operation: Operation) -> bool:
        """Explicit flag first, then a ``-> None`` service method taking the request type."""
        if operation.is_one_way:
            return True
        if operation.service_type is None or operation.request_type is None:
            return False

        return any(
            method.returns_none and operation.request_type in method.parameter_types
            for method in self._metadata.service_methods(operation.service_type)
        )

    def _get_api_member(self, member: MemberInfo) -> Optional[ApiMember]:
        """Memoized ``ApiMember`` lookup keyed by ``module.Type.member``."""
        key = member.full_name
        with self._lock:
            cached = self._api_members.get(key, _MISSING)
            if cached is _MISSING:
                cached = self._metadata.first_member_attribute(member, ApiMember)
                self._api_members[key] = cached
        return cached


def _can_access(restrict: Optional[Restrict], attribute: Optional[RequestAttributes]) -> bool:
    if attribute is None:
        return False
    if restrict is None:
        return True
    return restrict.can_access(attribute)


def _has_access_to_feature(exclude: Optional[Exclude], feature: Optional[Feature]) -> bool:
    if feature is None:
        return False
    if exclude is None:
        return True
    return not (exclude.feature & feature)


def _own_docstring(type_: type) -> Optional[str]:
    """First paragraph of the docstring declared on *type_* itself.

    Only user-declared classes are considered: built-in types such as
    ``str`` carry interpreter documentation, not API documentation.
    """
    if not inspect.isclass(type_) or type_.__module__ == "builtins":
        return None
    doc = vars(type_).get("__doc__")
    if not doc:
        return None
    if dataclasses.is_dataclass(type_) and doc.startswith(f"{type_.__name__}("):
        # Generated signature, not documentation.
        return None
    return inspect.cleandoc(doc).split("\n\n")[0].replace("\n", " ") or None
