"""Document generation, providers and ApiSpecService."""

from __future__ import annotations

from introspec.documentation.generator import (
    ApiDocumentationGenerator as ApiDocumentationGenerator,
)
from introspec.documentation.provider import (
    ApiDocumentationProvider as ApiDocumentationProvider,
    GeneratedDocumentationProvider as GeneratedDocumentationProvider,
)
from introspec.documentation.service import ApiSpecService as ApiSpecService
