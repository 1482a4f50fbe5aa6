"""Enricher supplying configured defaults for fields nothing else filled.

Implements only the resource and request capabilities. Run it after the
other enrichers so that its values are used as a last resort.
"""

from __future__ import annotations

from typing import Optional

from introspec.enrichment.interfaces import RequestEnricher, ResourceEnricher
from introspec.host.operation import Operation
from introspec.models import DocumenterSettings, StatusCode
from introspec.settings import resolve as active_settings


class FallbackEnricher(ResourceEnricher, RequestEnricher):
    """Supplies ``fallback_notes``, ``default_category`` and ``default_tags``.

    Args:
        settings: Explicit settings; the active settings are used when ``None``.
    """

    def __init__(self, settings: Optional[DocumenterSettings] = None) -> None:
        self._settings = settings

    def get_title(self, type_: type) -> Optional[str]:
        return None

    def get_description(self, type_: type) -> Optional[str]:
        return None

    def get_notes(self, type_: type) -> Optional[str]:
        return active_settings(self._settings).fallback_notes

    def get_allow_multiple(self, type_: type) -> Optional[bool]:
        return None

    def get_is_required(self, type_: type) -> Optional[bool]:
        return None

    def get_verbs(self, operation: Operation) -> Optional[list[str]]:
        return None

    def get_content_types(self, operation: Operation) -> Optional[list[str]]:
        return None

    def get_status_codes(self, operation: Operation) -> Optional[list[StatusCode]]:
        return None

    def get_relative_path(self, operation: Operation) -> Optional[str]:
        return None

    def get_category(self, operation: Operation) -> Optional[str]:
        return active_settings(self._settings).default_category

    def get_tags(self, operation: Operation) -> Optional[list[str]]:
        return list(active_settings(self._settings).default_tags) or None

    def get_has_validator(self, type_: Optional[type]) -> Optional[bool]:
        return None
