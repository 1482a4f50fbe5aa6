"""Spec command -- generate and print the documentation of a service host.

The target is given as ``module:attribute``. The attribute must be a
:class:`~introspec.host.service_host.ServiceHost`, or a zero-argument
callable returning one.
"""

from __future__ import annotations

import importlib
import os
import sys
from typing import Any, Optional

import typer

from introspec.documentation import ApiSpecService
from introspec.exceptions import HostLoadError, InvalidUsageError
from introspec.host import ServiceHost
from introspec.models import EnrichmentStrategy, SpecRequest
from introspec.output import debug, format_document, warning


def load_host(target: str) -> ServiceHost:
    """Import the :class:`ServiceHost` named by *target*.

    The working directory is importable, so a host module next to the
    caller is found without installing it.

    Args:
        target: ``package.module:attribute``.

    Raises:
        InvalidUsageError: If *target* is not of the form ``module:attribute``.
        HostLoadError: If the module or attribute cannot be loaded, or the
            attribute is not a host.
    """
    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        raise InvalidUsageError(f"Expected 'module:attribute', got: {target}")

    # Console scripts do not put the working directory on the import path.
    cwd = os.getcwd()
    if cwd not in sys.path:
        sys.path.insert(0, cwd)

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise HostLoadError(f"Cannot import module '{module_name}': {exc}") from exc

    obj: Any = module
    for part in attribute.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise HostLoadError(f"Module '{module_name}' has no attribute '{attribute}'") from exc

    if not isinstance(obj, ServiceHost) and callable(obj):
        debug(f"Calling host factory {target}")
        obj = obj()

    if not isinstance(obj, ServiceHost):
        raise HostLoadError(f"{target} is not a ServiceHost (got {type(obj).__name__})")
    return obj


def spec_command(
    target: str = typer.Argument(help="Service host as 'module:attribute'."),
    dto: Optional[list[str]] = typer.Option(
        None, "--dto", help="Only document these request DTOs (repeatable)."
    ),
    category: Optional[list[str]] = typer.Option(
        None, "--category", help="Only document resources in these categories (repeatable)."
    ),
    tag: Optional[list[str]] = typer.Option(
        None, "--tag", help="Only document resources carrying these tags (repeatable)."
    ),
    strategy: Optional[EnrichmentStrategy] = typer.Option(
        None, "--strategy", help="Collection strategy: set_if_empty or union."
    ),
) -> None:
    """Generate API documentation for a service host.

    Settings are resolved from the user config, ``./introspec.json``,
    ``INTROSPEC_*`` environment variables and ``--strategy``, in increasing
    order of precedence.

    Example::

        introspec spec myapp.api:host
        introspec --json spec myapp.api:host --tag pets
    """
    from introspec.config import resolve_settings
    from introspec.settings import set_settings

    settings = resolve_settings(collection_strategy=strategy)
    set_settings(settings)
    debug(f"Collection strategy: {settings.collection_strategy.value}")

    host = load_host(target)
    if not host.operations:
        warning(f"{target} has no registered operations")

    service = ApiSpecService(host.documentation_provider(settings=settings))
    response = service.get(
        SpecRequest(dto_names=dto or [], categories=category or [], tags=tag or [])
    )
    format_document(response.api_documentation.model_dump(mode="json", exclude_none=True))
