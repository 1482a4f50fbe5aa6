"""Process-wide enrichment settings with scoped overrides.

The active :class:`~introspec.models.DocumenterSettings` lives in a
:class:`contextvars.ContextVar`, so an override made in one thread or task
is invisible to the others. :func:`use_settings` installs a modified copy for
the duration of a ``with`` block and restores the previous value on every
exit path; nested overrides unwind in LIFO order.

Callers that prefer not to rely on ambient state pass a settings object
explicitly to the managers (see
:class:`~introspec.enrichment.request_manager.RequestEnricherManager`);
:func:`resolve` picks the explicit value when one is given.

Example::

    with use_settings(collection_strategy=EnrichmentStrategy.UNION):
        manager.enrich_request(doc, operation)
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator, Optional

from introspec.models import DocumenterSettings, EnrichmentStrategy

_current: ContextVar[DocumenterSettings] = ContextVar(
    "introspec_settings", default=DocumenterSettings()
)


def get_settings() -> DocumenterSettings:
    """Return the settings active in the current context."""
    return _current.get()


def set_settings(settings: DocumenterSettings) -> None:
    """Install *settings* as the active settings for the current context.

    Called once at startup (e.g. by the CLI after
    :func:`~introspec.config.resolve_settings`).
    """
    _current.set(settings)


def reset_settings() -> None:
    """Restore the default settings. Primarily useful in test suites."""
    _current.set(DocumenterSettings())


def resolve(settings: Optional[DocumenterSettings] = None) -> DocumenterSettings:
    """Return *settings* if given, otherwise the active settings."""
    return settings if settings is not None else _current.get()


def should_union(settings: Optional[DocumenterSettings] = None) -> bool:
    """Return ``True`` when collection fields should be merged rather than filled.

    Args:
        settings: Explicit settings; the active settings are used when ``None``.
    """
    return resolve(settings).collection_strategy == EnrichmentStrategy.UNION


@contextmanager
def use_settings(
    settings: Optional[DocumenterSettings] = None, **changes: Any
) -> Iterator[DocumenterSettings]:
    """Temporarily replace the active settings.

    Either pass a complete *settings* object, or keyword *changes* applied
    to the currently active settings (or both: changes win).

    Args:
        settings: Replacement settings.
        **changes: Field overrides, e.g. ``collection_strategy=...``.

    Yields:
        The settings installed for the block.
    """
    base = settings if settings is not None else _current.get()
    installed = (
        DocumenterSettings.model_validate({**base.model_dump(), **changes})
        if changes
        else base
    )
    token = _current.set(installed)
    try:
        yield installed
    finally:
        _current.reset(token)
