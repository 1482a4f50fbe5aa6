"""Enrichment of operation-scoped documentation.

:class:`RequestEnricherManager` is the orchestrator for one
:class:`~introspec.models.ApiResourceDocumentation`:

1. Resolve the nested return type (creating it from the response type when
   absent) and hand it to the resource-enrichment callable.
2. Fill tags, category, verbs, content types, status codes, relative path,
   security and the has-validator flag.
3. Hand the per-verb actions to an :class:`ActionEnricherManager`.

Tags are the only field merged according to the collection strategy; every
other field is filled only when empty. Missing collaborators are skipped
without error.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from introspec.enrichment.interfaces import (
    RequestEnricher,
    SecurityEnricher,
    as_capability,
)
from introspec.enrichment.merge import apply_strategy, distinct, fill_if_empty
from introspec.host.operation import Operation
from introspec.models import (
    ApiAction,
    ApiResourceDocumentation,
    ApiResourceType,
    DocumenterSettings,
)

logger = logging.getLogger(__name__)

EnrichResource = Callable[[Optional[ApiResourceType], Operation], None]
"""Signature of the callable that enriches a nested return type."""


class ActionEnricherManager:
    """Builds and enriches one :class:`~introspec.models.ApiAction` per verb.

    Args:
        request_enricher: Source of operation documentation. Sources lacking
            the request capability only produce empty actions.
        settings: Explicit settings; the active settings are used when ``None``.
    """

    def __init__(
        self,
        request_enricher: Any,  # noqa: ANN401
        settings: Optional[DocumenterSettings] = None,
    ) -> None:
        self._enricher = as_capability(request_enricher, RequestEnricher)
        self._settings = settings

    def enrich_actions(
        self,
        actions: Optional[list[ApiAction]],
        operation: Operation,
        verbs: Optional[list[str]],
    ) -> Optional[list[ApiAction]]:
        """Return *actions* with an entry for each of *verbs*, enriched.

        Existing actions are matched by verb and keep their position.
        """
        by_verb = {a.verb: a for a in actions or []}
        for verb in verbs or []:
            by_verb.setdefault(verb, ApiAction(verb=verb))

        enricher = self._enricher
        if enricher is not None:
            for action in by_verb.values():
                action.content_types = distinct(
                    fill_if_empty(action.content_types, lambda: enricher.get_content_types(operation))
                )
                action.status_codes = distinct(
                    fill_if_empty(action.status_codes, lambda: enricher.get_status_codes(operation))
                )
                action.relative_paths = apply_strategy(
                    action.relative_paths,
                    lambda: _as_list(enricher.get_relative_path(operation)),
                    self._settings,
                )

        return list(by_verb.values()) or actions


class RequestEnricherManager:
    """Enriches an :class:`~introspec.models.ApiResourceDocumentation` for an operation.

    Args:
        request_enricher: Source of operation documentation. Its security
            capability, if any, supplies :attr:`ApiResourceDocumentation.security`.
            May be ``None``.
        action_enricher_manager: Builds the per-verb actions. May be ``None``.
        enrich_resource: Enriches the nested return type, typically
            :meth:`ResourceEnricherManager.enrich_resource
            <introspec.enrichment.resource_manager.ResourceEnricherManager.enrich_resource>`.
        settings: Explicit settings; the active settings are used when ``None``.

    Example::

        resources = ResourceEnricherManager(enricher, enricher)
        manager = RequestEnricherManager(
            enricher, ActionEnricherManager(enricher), resources.enrich_resource
        )
        manager.enrich_request(doc, operation)
    """

    def __init__(
        self,
        request_enricher: Any,  # noqa: ANN401
        action_enricher_manager: Optional[ActionEnricherManager] = None,
        enrich_resource: Optional[EnrichResource] = None,
        settings: Optional[DocumenterSettings] = None,
    ) -> None:
        self._enricher = as_capability(request_enricher, RequestEnricher)
        self._security = as_capability(request_enricher, SecurityEnricher)
        self._actions = action_enricher_manager
        self._enrich_resource = enrich_resource
        self._settings = settings

    def enrich_request(
        self, documentation: Optional[ApiResourceDocumentation], operation: Operation
    ) -> None:
        """Fill the empty fields of *documentation* in place.

        Args:
            documentation: Fragment to enrich. ``None`` is ignored.
            operation: The operation the fragment documents.
        """
        if documentation is None:
            return

        documentation.return_type = self._enrich_return_type(documentation.return_type, operation)

        enricher = self._enricher
        if enricher is None:
            logger.debug("No request enricher for %s, skipping", operation.name or "<unnamed>")
        else:
            documentation.tags = apply_strategy(
                documentation.tags, lambda: enricher.get_tags(operation), self._settings
            )
            documentation.category = fill_if_empty(
                documentation.category, lambda: enricher.get_category(operation)
            )
            documentation.verbs = distinct(
                fill_if_empty(documentation.verbs, lambda: enricher.get_verbs(operation))
            )
            documentation.content_types = distinct(
                fill_if_empty(documentation.content_types, lambda: enricher.get_content_types(operation))
            )
            documentation.status_codes = distinct(
                fill_if_empty(documentation.status_codes, lambda: enricher.get_status_codes(operation))
            )
            documentation.relative_path = fill_if_empty(
                documentation.relative_path, lambda: enricher.get_relative_path(operation)
            )
            documentation.has_validator = fill_if_empty(
                documentation.has_validator, lambda: enricher.get_has_validator(operation.request_type)
            )

        security = self._security
        if security is not None:
            documentation.security = fill_if_empty(
                documentation.security, lambda: security.get_security(operation)
            )

        if self._actions is not None:
            documentation.actions = self._actions.enrich_actions(
                documentation.actions, operation, documentation.verbs
            )

    def _enrich_return_type(
        self, return_type: Optional[ApiResourceType], operation: Operation
    ) -> Optional[ApiResourceType]:
        """Create the return-type fragment if needed and enrich it."""
        if return_type is None and operation.response_type is not None:
            return_type = ApiResourceType(type_name=_type_name(operation.response_type))

        if self._enrich_resource is not None:
            self._enrich_resource(return_type, operation)

        return return_type


def _type_name(target: Any) -> str:  # noqa: ANN401
    return getattr(target, "__name__", None) or str(target).replace("typing.", "")


def _as_list(value: Optional[str]) -> Optional[list[str]]:
    return [value] if value else None
