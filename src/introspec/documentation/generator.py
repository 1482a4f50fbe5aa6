"""Runs the enrichment pipeline over every operation of a host.

Each configured enricher gets its own pair of managers. For every
operation the document fragment starts as a deep copy of the developer
override (or empty), then each enricher in priority order fills what is
still missing: the request DTO's own fields, the nested return type, and
the operation-scoped fields.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Optional, Sequence

from introspec.enrichment.request_manager import ActionEnricherManager, RequestEnricherManager
from introspec.enrichment.resource_manager import ResourceEnricherManager
from introspec.host.metadata import MetadataSource
from introspec.host.operation import Operation
from introspec.models import ApiDocumentation, ApiResourceDocumentation, DocumenterSettings

logger = logging.getLogger(__name__)

OverrideLookup = Callable[[Optional[type]], Optional[ApiResourceDocumentation]]


class ApiDocumentationGenerator:
    """Builds :class:`~introspec.models.ApiDocumentation` from operations.

    Args:
        enrichers: Metadata sources in priority order (highest first).
        metadata: Used to enumerate DTO members for property enrichment.
        settings: Explicit settings; the active settings are used when ``None``.
    """

    def __init__(
        self,
        enrichers: Sequence[Any],
        metadata: Optional[MetadataSource] = None,
        settings: Optional[DocumenterSettings] = None,
    ) -> None:
        self._pipelines: list[tuple[ResourceEnricherManager, RequestEnricherManager]] = []
        for enricher in enrichers:
            resources = ResourceEnricherManager(enricher, enricher, metadata, settings)
            requests = RequestEnricherManager(
                enricher,
                ActionEnricherManager(enricher, settings),
                resources.enrich_resource,
                settings,
            )
            self._pipelines.append((resources, requests))

    def generate(
        self,
        operations: Iterable[Operation],
        overrides: Optional[OverrideLookup] = None,
        title: str = "",
        description: Optional[str] = None,
    ) -> ApiDocumentation:
        """Document every operation.

        Args:
            operations: Operations to document.
            overrides: Returns the developer override for a request type.
            title: Document title.
            description: Document description.
        """
        resources = []
        for operation in operations:
            override = overrides(operation.request_type) if overrides is not None else None
            resources.append(self.generate_resource(operation, override))

        logger.debug("Generated documentation for %d operations", len(resources))
        return ApiDocumentation(title=title, description=description, resources=resources)

    def generate_resource(
        self,
        operation: Operation,
        override: Optional[ApiResourceDocumentation] = None,
    ) -> ApiResourceDocumentation:
        """Document a single operation, starting from a copy of *override*."""
        if override is not None:
            documentation = override.model_copy(deep=True)
        else:
            documentation = ApiResourceDocumentation()
        if not documentation.type_name:
            documentation.type_name = operation.name

        for resources, requests in self._pipelines:
            resources.enrich_resource(documentation, operation, operation.request_type)
            requests.enrich_request(documentation, operation)

        return documentation
