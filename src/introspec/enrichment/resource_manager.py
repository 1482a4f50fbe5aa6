"""Enrichment of type-level documentation (DTO fragments and their members).

:class:`ResourceEnricherManager` fills the fields of an
:class:`~introspec.models.ApiResourceType` from a
:class:`~introspec.enrichment.interfaces.ResourceEnricher`, and hands the
type's members to a :class:`PropertyEnricherManager`. Either collaborator
may be missing, in which case the corresponding fields are left as they
are.

Scalar fields are only ever filled when empty; a populated field is never
passed to the enricher.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from introspec.enrichment.interfaces import (
    PropertyEnricher,
    ResourceEnricher,
    as_capability,
)
from introspec.enrichment.merge import apply_strategy, fill_if_empty
from introspec.host.metadata import MetadataSource, ReflectionMetadataSource
from introspec.host.operation import MemberInfo, Operation
from introspec.models import ApiPropertyDocumentation, ApiResourceType, DocumenterSettings

logger = logging.getLogger(__name__)


class PropertyEnricherManager:
    """Enriches the member documentation of a DTO.

    Args:
        property_enricher: Source of member documentation. Sources that do
            not implement :class:`PropertyEnricher` are ignored.
        metadata: Used to enumerate the members of a type.
        settings: Explicit settings; the active settings are used when ``None``.
    """

    def __init__(
        self,
        property_enricher: Any,  # noqa: ANN401
        metadata: Optional[MetadataSource] = None,
        settings: Optional[DocumenterSettings] = None,
    ) -> None:
        self._enricher = as_capability(property_enricher, PropertyEnricher)
        self._metadata = metadata or ReflectionMetadataSource()
        self._settings = settings

    def enrich_properties(
        self,
        properties: Optional[list[ApiPropertyDocumentation]],
        type_: Optional[type],
    ) -> Optional[list[ApiPropertyDocumentation]]:
        """Return *properties* completed with every member of *type_*.

        Existing entries are matched by ``id`` (the member name) and kept in
        their original order; members without an entry are appended.
        """
        if self._enricher is None or type_ is None:
            return properties

        by_id = {p.id: p for p in properties or []}
        for member in self._metadata.members(type_):
            prop = by_id.get(member.name)
            if prop is None:
                prop = ApiPropertyDocumentation(id=member.name)
                by_id[member.name] = prop
            self._enrich_property(prop, member)

        return list(by_id.values()) or properties

    def _enrich_property(self, prop: ApiPropertyDocumentation, member: MemberInfo) -> None:
        enricher = self._enricher
        assert enricher is not None

        if prop.property_type is None:
            prop.property_type = member.type_name
        prop.title = fill_if_empty(prop.title, lambda: enricher.get_property_title(member))
        prop.description = fill_if_empty(
            prop.description, lambda: enricher.get_property_description(member)
        )
        prop.param_type = fill_if_empty(prop.param_type, lambda: enricher.get_param_type(member))
        prop.allow_multiple = fill_if_empty(
            prop.allow_multiple, lambda: enricher.get_property_allow_multiple(member)
        )
        prop.is_required = fill_if_empty(
            prop.is_required, lambda: enricher.get_property_is_required(member)
        )
        prop.notes = fill_if_empty(prop.notes, lambda: enricher.get_property_notes(member))
        prop.external_links = apply_strategy(
            prop.external_links, lambda: enricher.get_external_links(member), self._settings
        )
        prop.constraints = fill_if_empty(prop.constraints, lambda: enricher.get_constraints(member))


class ResourceEnricherManager:
    """Enriches an :class:`~introspec.models.ApiResourceType` for an operation.

    Title, description and notes describe the *resource type* (the
    operation's response type unless another is given); ``allow_multiple``
    and ``is_required`` are asked of the operation's request type.

    Args:
        resource_enricher: Source of type-level documentation. May be
            ``None`` or a source lacking the resource capability.
        property_enricher: Source of member documentation. May be ``None``.
        metadata: Used to enumerate the members of the resource type.
        settings: Explicit settings; the active settings are used when ``None``.
    """

    def __init__(
        self,
        resource_enricher: Any,  # noqa: ANN401
        property_enricher: Any = None,  # noqa: ANN401
        metadata: Optional[MetadataSource] = None,
        settings: Optional[DocumenterSettings] = None,
    ) -> None:
        self._enricher = as_capability(resource_enricher, ResourceEnricher)
        self._properties = PropertyEnricherManager(property_enricher, metadata, settings)

    def enrich_resource(
        self,
        resource: Optional[ApiResourceType],
        operation: Operation,
        resource_type: Optional[type] = None,
    ) -> None:
        """Fill the empty fields of *resource* in place.

        Args:
            resource: Fragment to enrich. ``None`` is ignored.
            operation: The operation the fragment belongs to.
            resource_type: Type the fragment documents; defaults to
                ``operation.response_type``.
        """
        if resource is None:
            return

        target = resource_type if resource_type is not None else operation.response_type
        enricher = self._enricher
        if enricher is None:
            logger.debug("No resource enricher for %s, skipping", operation.name or "<unnamed>")
        else:
            if target is not None:
                resource.title = fill_if_empty(resource.title, lambda: enricher.get_title(target))
                resource.description = fill_if_empty(
                    resource.description, lambda: enricher.get_description(target)
                )
                resource.notes = fill_if_empty(resource.notes, lambda: enricher.get_notes(target))

            request_type = operation.request_type
            if request_type is not None:
                resource.allow_multiple = fill_if_empty(
                    resource.allow_multiple, lambda: enricher.get_allow_multiple(request_type)
                )
                resource.is_required = fill_if_empty(
                    resource.is_required, lambda: enricher.get_is_required(request_type)
                )

        resource.properties = self._properties.enrich_properties(resource.properties, target)
