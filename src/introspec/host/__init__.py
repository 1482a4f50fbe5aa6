"""Host-side metadata: markers, operation snapshots, reflection, registry.

Applications describe their API with the markers in
:mod:`~introspec.host.attributes` and register operations on a
:class:`~introspec.host.service_host.ServiceHost`.
"""

from __future__ import annotations

from introspec.host.attributes import (
    AddHeader as AddHeader,
    Api as Api,
    ApiAllowableValues as ApiAllowableValues,
    ApiMember as ApiMember,
    ApiResponse as ApiResponse,
    Exclude as Exclude,
    Feature as Feature,
    RequestAttributes as RequestAttributes,
    Restrict as Restrict,
    Route as Route,
    Tag as Tag,
)
from introspec.host.metadata import (
    MetadataSource as MetadataSource,
    ReflectionMetadataSource as ReflectionMetadataSource,
)
from introspec.host.operation import (
    MemberInfo as MemberInfo,
    MethodInfo as MethodInfo,
    Operation as Operation,
)
from introspec.host.service_host import ServiceHost as ServiceHost
