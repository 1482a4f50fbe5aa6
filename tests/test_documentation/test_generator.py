"""End-to-end tests for documentation generation over a service host."""

from __future__ import annotations

from typing import Annotated, List
from unittest.mock import MagicMock

import pytest
from pydantic import BaseModel

from introspec.documentation.generator import ApiDocumentationGenerator
from introspec.enrichment.fallback import FallbackEnricher
from introspec.enrichment.interfaces import ResourceEnricher
from introspec.enrichment.reflection import ReflectionEnricher
from introspec.host.attributes import Api, ApiMember, ApiResponse, Route, Tag
from introspec.host.operation import Operation
from introspec.host.service_host import ServiceHost
from introspec.models import ApiResourceDocumentation, DocumenterSettings, StatusCode


class Pet(BaseModel):
    """A pet in the store."""

    name: str


@Api("Fetch a single pet")
@Route("/pets/{id}", verbs="GET")
@Tag("pets")
@ApiResponse(404, "Not found")
class GetPet(BaseModel):
    id: Annotated[int, ApiMember(description="Pet id", is_required=True)]


class Ping(BaseModel):
    pass


@pytest.fixture
def host() -> ServiceHost:
    host = ServiceHost(title="Pet Store", description="Pets API", formats=["json", "xml"])
    host.register(GetPet, response_type=Pet)
    host.register(Ping, is_one_way=True)
    return host


def _by_name(host: ServiceHost, **kwargs: object) -> dict[str, ApiResourceDocumentation]:
    documentation = host.documentation_provider(**kwargs).get_api_documentation()  # type: ignore[arg-type]
    return {r.type_name: r for r in documentation.resources}


class TestGeneratedDocumentation:
    def test_document_metadata(self, host: ServiceHost) -> None:
        documentation = host.documentation_provider().get_api_documentation()
        assert documentation.title == "Pet Store"
        assert documentation.description == "Pets API"
        assert [r.type_name for r in documentation.resources] == ["GetPet", "Ping"]

    def test_request_resource(self, host: ServiceHost) -> None:
        get_pet = _by_name(host)["GetPet"]

        assert get_pet.title == "GetPet"
        assert get_pet.description == "Fetch a single pet"
        assert get_pet.verbs == ["GET"]
        assert get_pet.relative_path == "/pets/{id}"
        assert get_pet.content_types == ["application/json", "application/xml"]
        assert get_pet.status_codes == [StatusCode(code=404, description="Not found")]
        assert get_pet.tags == ["pets"]
        assert get_pet.has_validator is False
        assert get_pet.security is None

    def test_request_properties(self, host: ServiceHost) -> None:
        (prop,) = _by_name(host)["GetPet"].properties
        assert prop.id == "id"
        assert prop.property_type == "int"
        assert prop.description == "Pet id"
        assert prop.is_required is True

    def test_return_type(self, host: ServiceHost) -> None:
        return_type = _by_name(host)["GetPet"].return_type
        assert return_type.type_name == "Pet"
        assert return_type.title == "Pet"
        assert return_type.description == "A pet in the store."
        assert [p.id for p in return_type.properties] == ["name"]

    def test_actions(self, host: ServiceHost) -> None:
        (action,) = _by_name(host)["GetPet"].actions
        assert action.verb == "GET"
        assert action.relative_paths == ["/pets/{id}"]

    def test_one_way_operation(self, host: ServiceHost) -> None:
        ping = _by_name(host)["Ping"]
        assert ping.return_type is None
        assert ping.verbs == ["GET", "POST", "PUT", "PATCH", "DELETE"]
        assert ping.relative_path == "/json/oneway/Ping"
        assert ping.status_codes == [StatusCode(code=204)]
        assert len(ping.actions) == 5

    def test_fallback_fills_remaining_fields(self, host: ServiceHost) -> None:
        settings = DocumenterSettings(
            default_category="misc", default_tags=("general",), fallback_notes="n/a"
        )
        resources = _by_name(host, settings=settings)

        assert resources["Ping"].category == "misc"
        assert resources["Ping"].tags == ["general"]
        assert resources["Ping"].notes == "n/a"
        assert resources["GetPet"].tags == ["pets"]

    def test_union_merges_fallback_tags(self, host: ServiceHost) -> None:
        settings = DocumenterSettings(collection_strategy="union", default_tags=("general",))
        assert _by_name(host, settings=settings)["GetPet"].tags == ["pets", "general"]


class TestOverrides:
    def test_override_wins_over_metadata(self, host: ServiceHost) -> None:
        host.override(GetPet, description="Overridden", verbs=["GET", "HEAD"], category="pets")
        get_pet = _by_name(host)["GetPet"]

        assert get_pet.description == "Overridden"
        assert get_pet.verbs == ["GET", "HEAD"]
        assert get_pet.category == "pets"
        assert get_pet.relative_path == "/pets/{id}"

    def test_override_is_not_mutated(self, host: ServiceHost) -> None:
        override = host.override(GetPet, category="pets")
        _by_name(host)
        assert override.verbs is None
        assert host.override_for(GetPet).verbs is None


class TestGenerator:
    def test_enrichers_applied_in_priority_order(self) -> None:
        first = MagicMock(spec=ResourceEnricher)
        first.get_title.return_value = "first"
        first.get_description.return_value = None
        first.get_notes.return_value = None
        first.get_allow_multiple.return_value = None
        first.get_is_required.return_value = None
        second = MagicMock(spec=ResourceEnricher)
        second.get_title.return_value = "second"
        second.get_description.return_value = "from second"
        second.get_notes.return_value = None
        second.get_allow_multiple.return_value = None
        second.get_is_required.return_value = None

        generator = ApiDocumentationGenerator([first, second])
        resource = generator.generate_resource(Operation(request_type=Ping))

        assert resource.title == "first"
        assert resource.description == "from second"
        second.get_title.assert_not_called()

    def test_type_name_defaults_to_operation_name(self) -> None:
        generator = ApiDocumentationGenerator([FallbackEnricher()])
        assert generator.generate_resource(Operation(request_type=Ping)).type_name == "Ping"

    def test_builtin_return_type_has_no_description(self) -> None:
        generator = ApiDocumentationGenerator([ReflectionEnricher()])
        resource = generator.generate_resource(Operation(request_type=Ping, response_type=str))

        assert resource.return_type.type_name == "str"
        assert resource.return_type.title == "str"
        assert resource.return_type.description is None

    def test_generic_alias_response_type_does_not_raise(self) -> None:
        generator = ApiDocumentationGenerator([ReflectionEnricher()])
        resource = generator.generate_resource(
            Operation(request_type=Ping, response_type=List[Pet])  # type: ignore[arg-type]
        )

        assert resource.return_type is not None
        assert resource.return_type.description is None
        assert not resource.return_type.properties

    def test_registered_list_response_documents_element_type(self) -> None:
        host = ServiceHost()
        host.register(Ping, response_type=list[Pet])  # type: ignore[arg-type]
        resource = host.documentation_provider().get_api_documentation().resources[0]

        assert resource.return_type.type_name == "Pet"
        assert resource.return_type.description == "A pet in the store."
        assert [p.id for p in resource.return_type.properties] == ["name"]

    def test_provider_memoizes_and_refreshes(self, host: ServiceHost) -> None:
        provider = host.documentation_provider()
        first = provider.get_api_documentation()
        assert provider.get_api_documentation() is first
        provider.refresh()
        assert provider.get_api_documentation() is not first
