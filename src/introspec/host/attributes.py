"""Metadata markers attached to request/response DTOs.

Type-level markers are frozen dataclasses that double as class decorators.
Applying one records it on the decorated class; stacked decorators keep
their top-down source order::

    @Route("/pets/{id}", notes="Looks up a single pet")
    @ApiResponse(404, "Pet not found")
    @Exclude(Feature.CSV)
    class GetPet(BaseModel):
        id: Annotated[int, ApiMember(description="Pet id", is_required=True)]

Member-level markers (:class:`ApiMember`, :class:`ApiAllowableValues`) are
attached with :data:`typing.Annotated` and are read back by
:class:`~introspec.host.metadata.ReflectionMetadataSource`.

:class:`RequestAttributes` and :class:`Feature` name the wire formats a host
can expose. :func:`safe_parse` converts a format name into a member without
ever raising, so one malformed format entry cannot abort content-type
resolution.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, TypeVar

ATTRIBUTES_KEY = "__introspec_attributes__"
"""Class attribute under which type-level markers are stored."""

C = TypeVar("C", bound=type)
E = TypeVar("E", bound=enum.Enum)


class RequestAttributes(enum.Flag):
    """Request formats an operation may be restricted to."""

    NONE = 0
    JSON = 1
    XML = 2
    JSV = 4
    CSV = 8
    HTML = 16
    PROTOBUF = 32
    MSGPACK = 64
    SOAP11 = 128
    SOAP12 = 256
    ANY_FORMAT = 511


class Feature(enum.Flag):
    """Host features (one per format) a request DTO may opt out of."""

    NONE = 0
    JSON = enum.auto()
    XML = enum.auto()
    JSV = enum.auto()
    CSV = enum.auto()
    HTML = enum.auto()
    PROTOBUF = enum.auto()
    MSGPACK = enum.auto()
    SOAP11 = enum.auto()
    SOAP12 = enum.auto()


def safe_parse(enum_cls: type[E], name: Optional[str]) -> Optional[E]:
    """Look up *name* in *enum_cls* case-insensitively.

    Returns:
        The matching member, or ``None`` for unknown or empty names.
    """
    if not name:
        return None
    return enum_cls.__members__.get(name.strip().upper().replace("-", "_"))


class _TypeAttribute:
    """Mixin that lets a marker instance decorate a class."""

    def __call__(self, cls: C) -> C:
        existing = vars(cls).get(ATTRIBUTES_KEY, ())
        # Decorators apply bottom-up; prepend to keep source order.
        setattr(cls, ATTRIBUTES_KEY, (self, *existing))
        return cls


@dataclass(frozen=True)
class Api(_TypeAttribute):
    """Describes a DTO."""

    description: Optional[str] = None


@dataclass(frozen=True)
class Route(_TypeAttribute):
    """Declares the path (and optionally the verbs) a request DTO is served on."""

    path: str
    verbs: Optional[str] = None
    summary: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class ApiResponse(_TypeAttribute):
    """Declares a status code the operation may return."""

    status_code: int
    description: str = ""


@dataclass(frozen=True)
class AddHeader(_TypeAttribute):
    """Forces a response header; its content type is always documented."""

    content_type: Optional[str] = None
    default_content_type: Optional[str] = None


@dataclass(frozen=True)
class Exclude(_TypeAttribute):
    """Opts a request DTO out of one or more host features."""

    feature: Feature = Feature.NONE


@dataclass(frozen=True)
class Restrict(_TypeAttribute):
    """Limits the request formats an operation can be called with."""

    access_to: RequestAttributes = RequestAttributes.ANY_FORMAT

    def can_access(self, attributes: RequestAttributes) -> bool:
        """Return ``True`` if every flag in *attributes* is allowed."""
        if attributes == RequestAttributes.NONE:
            return False
        return (self.access_to & attributes) == attributes


@dataclass(frozen=True)
class Tag(_TypeAttribute):
    """Groups a request DTO under a documentation tag."""

    name: str


@dataclass(frozen=True)
class ApiMember:
    """Documents a DTO member. Attach with ``Annotated[T, ApiMember(...)]``."""

    name: Optional[str] = None
    description: Optional[str] = None
    parameter_type: Optional[str] = None
    allow_multiple: Optional[bool] = None
    is_required: Optional[bool] = None


@dataclass(frozen=True)
class ApiAllowableValues:
    """Constrains a DTO member to a list of values or a numeric range."""

    name: Optional[str] = None
    type: str = "LIST"
    values: tuple[str, ...] = field(default_factory=tuple)
    min: Optional[float] = None
    max: Optional[float] = None

    @classmethod
    def list_of(cls, name: str, *values: str) -> "ApiAllowableValues":
        """Build a ``LIST`` constraint."""
        return cls(name=name, type="LIST", values=tuple(values))

    @classmethod
    def between(cls, name: str, low: float, high: float) -> "ApiAllowableValues":
        """Build a ``RANGE`` constraint."""
        return cls(name=name, type="RANGE", min=low, max=high)
