"""Canonical Pydantic models shared across all introspec modules.

The models fall into two groups:

**Settings models** -- serialised as JSON in the user's config directory:
    :class:`EnrichmentStrategy` and :class:`DocumenterSettings`.

**Documentation models** -- the fragments produced by the enrichment
pipeline and served to clients:
    :class:`StatusCode`, :class:`ListConstraint`, :class:`RangeConstraint`,
    :class:`Permissions`, :class:`ApiSecurity`,
    :class:`ApiPropertyDocumentation`, :class:`ApiAction`,
    :class:`ApiResourceType`, :class:`ApiResourceDocumentation`,
    :class:`ApiDocumentation`, :class:`SpecRequest` and
    :class:`SpecResponse`.

Documentation fragments are mutable: they are created empty (or partially
filled from developer overrides) and enriched in place. A field left at
``None`` means "unknown", not "empty by design". Constraints, security
descriptors and status codes are immutable once constructed.
"""

from __future__ import annotations

import enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# --- Settings ---


class EnrichmentStrategy(str, enum.Enum):
    """How pre-existing collection values are reconciled with enriched ones.

    ``SET_IF_EMPTY`` only fills collections that are empty; ``UNION`` always
    asks the enricher and keeps the distinct union of both. Scalar fields
    always behave as ``SET_IF_EMPTY``.
    """

    SET_IF_EMPTY = "set_if_empty"
    UNION = "union"


class DocumenterSettings(BaseModel):
    """Settings that drive the enrichment pipeline.

    Persisted at ``~/.config/introspec/config.json`` and resolved by
    :func:`~introspec.config.resolve_settings`. The active instance is held
    by :mod:`introspec.settings` and may be overridden for a block with
    :func:`~introspec.settings.use_settings`.
    """

    model_config = ConfigDict(frozen=True)

    collection_strategy: EnrichmentStrategy = Field(
        default=EnrichmentStrategy.SET_IF_EMPTY,
        description="Merge behaviour for collection fields: set_if_empty or union",
    )
    replacement_verbs: tuple[str, ...] = Field(
        default=("GET", "POST", "PUT", "PATCH", "DELETE"),
        description="Verbs documented for operations that accept ANY verb",
    )
    route_format: str = Field(
        default="json", description="Format segment used for synthesized routes"
    )
    default_tags: tuple[str, ...] = Field(
        default=(), description="Tags supplied by the fallback enricher"
    )
    default_category: Optional[str] = Field(
        default=None, description="Category supplied by the fallback enricher"
    )
    fallback_notes: Optional[str] = Field(
        default=None, description="Notes supplied by the fallback enricher"
    )


# --- Documentation fragments ---


class StatusCode(BaseModel):
    """An HTTP status code a resource may return."""

    model_config = ConfigDict(frozen=True)

    code: int
    description: str = ""


class ListConstraint(BaseModel):
    """Constrains a property to one of a fixed list of values."""

    model_config = ConfigDict(frozen=True)

    type: Literal["list"] = "list"
    name: Optional[str] = None
    values: tuple[str, ...] = ()


class RangeConstraint(BaseModel):
    """Constrains a numeric property to an inclusive ``[min, max]`` range."""

    model_config = ConfigDict(frozen=True)

    type: Literal["range"] = "range"
    name: Optional[str] = None
    min: Optional[float] = None
    max: Optional[float] = None


PropertyConstraint = Annotated[
    Union[ListConstraint, RangeConstraint], Field(discriminator="type")
]


class Permissions(BaseModel):
    """A requirement set: every value in ``all_of`` and at least one of ``any_of``."""

    model_config = ConfigDict(frozen=True)

    all_of: tuple[str, ...] = ()
    any_of: tuple[str, ...] = ()

    @classmethod
    def create(
        cls, all_of: Optional[list[str] | tuple[str, ...]], any_of: Optional[list[str] | tuple[str, ...]]
    ) -> Optional["Permissions"]:
        """Build a requirement set, or return ``None`` when neither list has values."""
        if not all_of and not any_of:
            return None
        return cls(all_of=tuple(all_of or ()), any_of=tuple(any_of or ()))


class ApiSecurity(BaseModel):
    """Authentication requirements of an operation."""

    model_config = ConfigDict(frozen=True)

    is_protected: bool = False
    roles: Optional[Permissions] = None
    permissions: Optional[Permissions] = None


class ApiPropertyDocumentation(BaseModel):
    """Documentation for a single member of a DTO."""

    id: str
    property_type: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    param_type: Optional[str] = None
    allow_multiple: Optional[bool] = None
    is_required: Optional[bool] = None
    notes: Optional[str] = None
    external_links: Optional[list[str]] = None
    constraints: Optional[PropertyConstraint] = None


class ApiAction(BaseModel):
    """Per-verb documentation of an operation."""

    verb: str
    notes: Optional[str] = None
    content_types: Optional[list[str]] = None
    status_codes: Optional[list[StatusCode]] = None
    relative_paths: Optional[list[str]] = None


class ApiResourceType(BaseModel):
    """Documentation of a type referenced by an operation (request or response)."""

    type_name: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    notes: Optional[str] = None
    allow_multiple: Optional[bool] = None
    is_required: Optional[bool] = None
    properties: Optional[list[ApiPropertyDocumentation]] = None


class ApiResourceDocumentation(ApiResourceType):
    """Documentation of one operation, keyed by its request DTO.

    Inherits the type-level fields from :class:`ApiResourceType` (describing
    the request DTO) and adds the operation-scoped fields. The response DTO
    is described by the nested :attr:`return_type`.
    """

    relative_path: Optional[str] = None
    verbs: Optional[list[str]] = None
    content_types: Optional[list[str]] = None
    status_codes: Optional[list[StatusCode]] = None
    category: Optional[str] = None
    tags: Optional[list[str]] = None
    security: Optional[ApiSecurity] = None
    return_type: Optional[ApiResourceType] = None
    has_validator: Optional[bool] = None
    actions: Optional[list[ApiAction]] = None


class ApiDocumentation(BaseModel):
    """The aggregated document served to clients."""

    title: str = ""
    description: Optional[str] = None
    resources: list[ApiResourceDocumentation] = Field(default_factory=list)

    def filter(self, request: "SpecRequest") -> "ApiDocumentation":
        """Return a copy holding only the resources that match *request*.

        A resource is kept when it matches every non-empty filter: its
        ``type_name`` is in ``dto_names``, its ``category`` is in
        ``categories``, and at least one of its ``tags`` is in ``tags``.
        The kept resources are deep copies, so callers may mutate the
        result without touching this document.
        """
        resources = [r.model_copy(deep=True) for r in self.resources if request.matches(r)]
        return self.model_copy(update={"resources": resources})


class SpecRequest(BaseModel):
    """Filter parameters for :class:`~introspec.documentation.service.ApiSpecService`."""

    dto_names: list[str] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)

    def matches(self, resource: ApiResourceDocumentation) -> bool:
        """Return ``True`` if *resource* passes every non-empty filter."""
        if self.dto_names and resource.type_name not in self.dto_names:
            return False
        if self.categories and resource.category not in self.categories:
            return False
        if self.tags and not set(self.tags) & set(resource.tags or ()):
            return False
        return True


class SpecResponse(BaseModel):
    """Response returned by :class:`~introspec.documentation.service.ApiSpecService`."""

    api_documentation: ApiDocumentation
