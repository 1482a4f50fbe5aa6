"""Documentation providers consumed by ApiSpecService."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

from introspec.documentation.generator import ApiDocumentationGenerator
from introspec.models import ApiDocumentation

if TYPE_CHECKING:
    from introspec.host.service_host import ServiceHost


class ApiDocumentationProvider(ABC):
    """Source of the aggregated API documentation."""

    @abstractmethod
    def get_api_documentation(self) -> ApiDocumentation:
        """Return the documentation for every operation."""
        ...


class GeneratedDocumentationProvider(ApiDocumentationProvider):
    """Generates documentation for a host once and serves it from memory.

    Args:
        host: The host whose operations and overrides are documented.
        generator: The configured enrichment pipeline.
    """

    def __init__(self, host: "ServiceHost", generator: ApiDocumentationGenerator) -> None:
        self._host = host
        self._generator = generator
        self._documentation: Optional[ApiDocumentation] = None
        self._lock = threading.Lock()

    def get_api_documentation(self) -> ApiDocumentation:
        with self._lock:
            if self._documentation is None:
                self._documentation = self._generator.generate(
                    self._host.operations,
                    self._host.override_for,
                    title=self._host.title,
                    description=self._host.description,
                )
            return self._documentation

    def refresh(self) -> None:
        """Discard the generated documentation; the next call regenerates it."""
        with self._lock:
            self._documentation = None
