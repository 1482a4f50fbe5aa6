"""Reflective access to the metadata attached to DTOs and services.

:class:`MetadataSource` is the seam between the enrichers and the host's
type system. :class:`ReflectionMetadataSource` is the default
implementation: it reads the markers from :mod:`introspec.host.attributes`,
enumerates DTO members (Pydantic fields, dataclass fields or annotated
class attributes) and inspects service methods.

A marker that is not present is reported as ``None`` or an empty list.
Targets that are not classes (e.g. ``typing.List[Pet]``) and types whose
annotations cannot be resolved are treated the same way; the latter are
logged at debug level.
"""

from __future__ import annotations

import inspect
import logging
from abc import ABC, abstractmethod
from typing import (
    Annotated,
    Any,
    ClassVar,
    Optional,
    Sequence,
    TypeVar,
    get_args,
    get_origin,
    get_type_hints,
)

from pydantic import BaseModel

from introspec.host.attributes import ATTRIBUTES_KEY
from introspec.host.operation import MemberInfo, MethodInfo

logger = logging.getLogger(__name__)

A = TypeVar("A")

DEFAULT_FORMATS: tuple[str, ...] = ("json", "xml", "jsv", "csv", "html")
"""Formats exposed by a host that does not declare its own."""


class MetadataSource(ABC):
    """Read-only view of the host's reflective metadata.

    Subclasses implement :meth:`attributes`, :meth:`member_attributes`,
    :meth:`members`, :meth:`service_methods` and :meth:`available_formats`.
    The ``first_*`` helpers are derived from them.
    """

    @abstractmethod
    def attributes(self, target: type, kind: type[A]) -> list[A]:
        """Return every marker of *kind* on *target*, own markers first."""
        ...

    @abstractmethod
    def member_attributes(self, member: MemberInfo, kind: type[A]) -> list[A]:
        """Return every marker of *kind* attached to *member*."""
        ...

    @abstractmethod
    def members(self, target: type) -> list[MemberInfo]:
        """Return the public members of *target* in declaration order."""
        ...

    @abstractmethod
    def service_methods(self, service_type: type) -> list[MethodInfo]:
        """Return the public instance methods declared directly on *service_type*."""
        ...

    @abstractmethod
    def available_formats(self) -> list[str]:
        """Return the format names the host exposes (e.g. ``"json"``, ``"x-msgpack"``)."""
        ...

    def first_attribute(self, target: Optional[type], kind: type[A]) -> Optional[A]:
        """Return the first marker of *kind* on *target*, or ``None``."""
        if target is None:
            return None
        found = self.attributes(target, kind)
        return found[0] if found else None

    def first_member_attribute(self, member: MemberInfo, kind: type[A]) -> Optional[A]:
        """Return the first marker of *kind* on *member*, or ``None``."""
        found = self.member_attributes(member, kind)
        return found[0] if found else None


class ReflectionMetadataSource(MetadataSource):
    """Metadata source backed by Python's runtime type information.

    Args:
        formats: Format names the host exposes. Defaults to
            :data:`DEFAULT_FORMATS`.
    """

    def __init__(self, formats: Optional[Sequence[str]] = None) -> None:
        self._formats = list(formats) if formats is not None else list(DEFAULT_FORMATS)

    def attributes(self, target: type, kind: type[A]) -> list[A]:
        if not is_plain_class(target):
            return []
        found: list[A] = []
        for klass in inspect.getmro(target):
            for marker in vars(klass).get(ATTRIBUTES_KEY, ()):
                if isinstance(marker, kind):
                    found.append(marker)
        return found

    def member_attributes(self, member: MemberInfo, kind: type[A]) -> list[A]:
        metadata = member.metadata
        if not metadata:
            declared = {m.name: m for m in self.members(member.declaring_type)}
            if member.name in declared:
                metadata = declared[member.name].metadata
        return [m for m in metadata if isinstance(m, kind)]

    def members(self, target: type) -> list[MemberInfo]:
        if not is_plain_class(target):
            return []
        if issubclass(target, BaseModel):
            return [
                MemberInfo(target, name, info.annotation, tuple(info.metadata))
                for name, info in target.model_fields.items()
            ]
        return _annotated_members(target)

    def service_methods(self, service_type: type) -> list[MethodInfo]:
        methods: list[MethodInfo] = []
        for name, func in vars(service_type).items():
            if name.startswith("_") or not inspect.isfunction(func):
                continue
            hints = _type_hints(func, include_extras=False)
            params = [
                hints.get(p.name, p.annotation)
                for p in list(inspect.signature(func).parameters.values())[1:]
            ]
            methods.append(
                MethodInfo(
                    name=name,
                    parameter_types=tuple(params),
                    returns_none=hints.get("return", inspect.Signature.empty) is type(None),
                )
            )
        return methods

    def available_formats(self) -> list[str]:
        return list(self._formats)


def is_plain_class(target: Any) -> bool:  # noqa: ANN401
    """Whether *target* is a class rather than a parameterized generic."""
    # list[Pet] passes inspect.isclass on Python 3.10.
    return inspect.isclass(target) and get_origin(target) is None


def _type_hints(target: Any, include_extras: bool) -> dict[str, Any]:  # noqa: ANN401
    """Resolve annotations on *target*, returning ``{}`` when they cannot be resolved."""
    try:
        return get_type_hints(target, include_extras=include_extras)
    except (NameError, TypeError) as exc:
        logger.debug("Cannot resolve type hints for %r: %s", target, exc)
        return {}


def _annotated_members(target: type) -> list[MemberInfo]:
    """Members of a plain class or dataclass, read from its annotations."""
    members: list[MemberInfo] = []
    for name, hint in _type_hints(target, include_extras=True).items():
        if name.startswith("_") or hint is ClassVar or get_origin(hint) is ClassVar:
            continue
        metadata: tuple[Any, ...] = ()
        if get_origin(hint) is Annotated:
            hint, *extras = get_args(hint)
            metadata = tuple(extras)
        members.append(MemberInfo(target, name, hint, metadata))
    return members
