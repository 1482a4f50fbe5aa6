"""Request handler returning the (filtered) API documentation."""

from __future__ import annotations

from typing import Optional

from introspec.documentation.provider import ApiDocumentationProvider
from introspec.exceptions import require
from introspec.models import SpecRequest, SpecResponse


class ApiSpecService:
    """Serves the documentation of a provider, filtered per request.

    Args:
        documentation_provider: Source of the documentation.

    Raises:
        ArgumentValidationError: If *documentation_provider* is ``None``.
    """

    def __init__(self, documentation_provider: ApiDocumentationProvider) -> None:
        self._provider = require(documentation_provider, "documentation_provider")

    def get(self, request: Optional[SpecRequest] = None) -> SpecResponse:
        """Return the documentation matching *request* (everything when ``None``)."""
        documentation = self._provider.get_api_documentation().filter(request or SpecRequest())
        return SpecResponse(api_documentation=documentation)
