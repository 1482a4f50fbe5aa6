"""Registry of the operations a service host exposes.

:class:`ServiceHost` is what an application hands to introspec: it records
one :class:`~introspec.host.operation.Operation` per request DTO, any
developer-declared documentation overrides, and the formats the host
serves.

Example::

    host = ServiceHost(title="Pet Store", formats=["json", "xml"])
    host.register(GetPet, response_type=Pet, service_type=PetService)
    host.override(GetPet, category="pets", tags=["pets"])
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, Sequence, get_args

from introspec.exceptions import ArgumentValidationError
from introspec.host.attributes import Restrict, Route
from introspec.host.metadata import MetadataSource, ReflectionMetadataSource, is_plain_class
from introspec.host.operation import ANY_VERB, Operation
from introspec.models import ApiResourceDocumentation, DocumenterSettings

if TYPE_CHECKING:
    from introspec.documentation.provider import GeneratedDocumentationProvider

logger = logging.getLogger(__name__)


class ServiceHost:
    """Holds operations and overrides for one documented API.

    Args:
        title: Title of the generated document.
        description: Description of the generated document.
        formats: Format names the host serves; see
            :data:`~introspec.host.metadata.DEFAULT_FORMATS`.
        metadata: Metadata source; overrides *formats* when given.
    """

    def __init__(
        self,
        title: str = "",
        description: Optional[str] = None,
        formats: Optional[Sequence[str]] = None,
        metadata: Optional[MetadataSource] = None,
    ) -> None:
        self.title = title
        self.description = description
        self.metadata = metadata or ReflectionMetadataSource(formats)
        self._operations: dict[type, Operation] = {}
        self._overrides: dict[type, ApiResourceDocumentation] = {}

    @property
    def operations(self) -> list[Operation]:
        """Registered operations in registration order."""
        return list(self._operations.values())

    def register(
        self,
        request_type: type,
        response_type: Optional[type] = None,
        actions: Optional[Sequence[str]] = None,
        service_type: Optional[type] = None,
        **options: Any,
    ) -> Operation:
        """Register an operation for *request_type*.

        Args:
            request_type: The request DTO.
            response_type: The response DTO, if any. A generic alias over a
                single class (``list[Pet]``, ``Optional[Pet]``) documents that
                class.
            actions: Declared verbs. Defaults to the verbs of the DTO's
                ``@Route`` marker, or ``ANY``.
            service_type: Class implementing the operation. Its ``Restrict``
                marker applies unless the DTO declares its own.
            **options: Remaining :class:`Operation` fields, e.g.
                ``requires_authentication=True`` or ``is_one_way=True``.

        Returns:
            The registered operation. Registering the same request type
            again replaces it.

        Raises:
            ArgumentValidationError: If *response_type* is neither a class nor
                an alias over exactly one class.
        """
        response_type = _response_class(response_type)

        if actions is None:
            route = self.metadata.first_attribute(request_type, Route)
            if route is not None and route.verbs:
                actions = [v.strip().upper() for v in route.verbs.split(",") if v.strip()]
            else:
                actions = [ANY_VERB]

        if "restrict_to" not in options:
            options["restrict_to"] = self.metadata.first_attribute(
                request_type, Restrict
            ) or self.metadata.first_attribute(service_type, Restrict)

        for key in (
            "required_roles",
            "requires_any_role",
            "required_permissions",
            "requires_any_permission",
        ):
            if key in options:
                options[key] = tuple(options[key])

        operation = Operation(
            request_type=request_type,
            response_type=response_type,
            actions=tuple(actions),
            service_type=service_type,
            **options,
        )
        self._operations[request_type] = operation
        logger.debug("Registered operation %s %s", list(operation.actions), operation.name)
        return operation

    def override(self, request_type: type, **fields: Any) -> ApiResourceDocumentation:
        """Declare documentation for *request_type* that enrichment must respect.

        Repeated calls merge into the same override.

        Returns:
            The validated override fragment.
        """
        current = self._overrides.get(request_type)
        data = current.model_dump(exclude_none=True) if current is not None else {}
        data.setdefault("type_name", request_type.__name__)
        data.update(fields)
        override = ApiResourceDocumentation.model_validate(data)
        self._overrides[request_type] = override
        return override

    def override_for(self, request_type: Optional[type]) -> Optional[ApiResourceDocumentation]:
        """Return the override declared for *request_type*, if any."""
        if request_type is None:
            return None
        return self._overrides.get(request_type)

    def documentation_provider(
        self,
        enrichers: Optional[Sequence[Any]] = None,
        settings: Optional[DocumenterSettings] = None,
    ) -> "GeneratedDocumentationProvider":
        """Build a provider generating documentation for this host.

        Args:
            enrichers: Metadata sources in priority order. Defaults to a
                :class:`~introspec.enrichment.reflection.ReflectionEnricher`
                over this host's metadata followed by a
                :class:`~introspec.enrichment.fallback.FallbackEnricher`.
            settings: Explicit settings; the active settings are used when ``None``.
        """
        from introspec.documentation.generator import ApiDocumentationGenerator
        from introspec.documentation.provider import GeneratedDocumentationProvider
        from introspec.enrichment import FallbackEnricher, ReflectionEnricher

        if enrichers is None:
            enrichers = [
                ReflectionEnricher(self.metadata, settings),
                FallbackEnricher(settings),
            ]
        generator = ApiDocumentationGenerator(enrichers, self.metadata, settings)
        return GeneratedDocumentationProvider(self, generator)


def _response_class(response_type: Any) -> Optional[type]:  # noqa: ANN401
    """Return the class a response annotation documents."""
    if response_type is None or is_plain_class(response_type):
        return response_type
    classes = [a for a in get_args(response_type) if is_plain_class(a) and a is not type(None)]
    if len(classes) != 1:
        raise ArgumentValidationError(
            f"Response type {response_type!r} must be a class or wrap exactly one class"
        )
    logger.debug("Documenting %r as %s", response_type, classes[0].__name__)
    return classes[0]
