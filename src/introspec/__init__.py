"""introspec -- Extract API documentation from a service host's metadata.

Every operation registered with a :class:`~introspec.host.ServiceHost` is
described by reading the metadata attached to its request/response DTOs
(routes, responses, auth requirements, format restrictions) and merging it
with developer-declared overrides into a single
:class:`~introspec.models.ApiDocumentation`.

Typical usage::

    host = ServiceHost(title="Pets")
    host.register(GetPet, response_type=Pet, actions=["GET"])
    provider = host.documentation_provider()
    doc = ApiSpecService(provider).get(SpecRequest(tags=["pets"])).api_documentation

Modules:
    models: Pydantic models for settings and the documentation fragments.
    settings: Process-wide enrichment settings with scoped overrides.
    enrichment: Capability interfaces, merge helpers, managers, enrichers.
    host: Host-side metadata markers, operations and reflection.
    documentation: Document generation, providers and ApiSpecService.
    config: XDG-aware settings files and precedence resolution.
    app: Typer CLI entry point.
"""

__version__ = "0.1.0"
