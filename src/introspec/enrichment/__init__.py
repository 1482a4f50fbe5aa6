"""Enrichment pipeline: capability interfaces, merge helpers, managers, enrichers.

For every operation, the managers decide field by field whether an enricher
should be asked for a value and how the answer is merged:

1. **Interfaces** (:mod:`~introspec.enrichment.interfaces`) -- four
   independent capabilities a metadata source may implement.
2. **Merge helpers** (:mod:`~introspec.enrichment.merge`) -- fill-if-empty
   and union semantics, selected by the collection strategy.
3. **Managers** (:mod:`~introspec.enrichment.resource_manager`,
   :mod:`~introspec.enrichment.request_manager`) -- orchestrate the
   enrichers over one documentation fragment.
4. **Enrichers** (:mod:`~introspec.enrichment.reflection`,
   :mod:`~introspec.enrichment.fallback`) -- concrete metadata sources.

Priority chain (lowest to highest):
    fallback defaults --> reflected metadata --> developer overrides
"""

from __future__ import annotations

from introspec.enrichment.fallback import FallbackEnricher as FallbackEnricher
from introspec.enrichment.interfaces import (
    PropertyEnricher as PropertyEnricher,
    RequestEnricher as RequestEnricher,
    ResourceEnricher as ResourceEnricher,
    SecurityEnricher as SecurityEnricher,
    as_capability as as_capability,
)
from introspec.enrichment.reflection import ReflectionEnricher as ReflectionEnricher
from introspec.enrichment.request_manager import (
    ActionEnricherManager as ActionEnricherManager,
    RequestEnricherManager as RequestEnricherManager,
)
from introspec.enrichment.resource_manager import (
    PropertyEnricherManager as PropertyEnricherManager,
    ResourceEnricherManager as ResourceEnricherManager,
)
