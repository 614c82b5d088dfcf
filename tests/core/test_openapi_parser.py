"""Tests for endpoint extraction."""

import copy

import pytest

from swagger2jmeter.core.data_structures import EndpointDescriptor
from swagger2jmeter.core.openapi_parser import (
    DIALECT_OPENAPI,
    DIALECT_SWAGGER,
    OpenAPIParser,
    detect_dialect,
    get_spec_info,
)


class TestDetectDialect:
    """Tests for detect_dialect()."""

    @pytest.mark.parametrize("version", ["3.0.0", "3.1.0", "3"])
    def test_openapi_3(self, version):
        assert detect_dialect({"openapi": version}) == DIALECT_OPENAPI

    @pytest.mark.parametrize(
        "doc",
        [{"swagger": "2.0"}, {"openapi": "2.0"}, {}, None, "not a document"],
    )
    def test_everything_else_is_swagger(self, doc):
        assert detect_dialect(doc) == DIALECT_SWAGGER

    def test_numeric_version(self):
        assert detect_dialect({"openapi": 3.0}) == DIALECT_OPENAPI


class TestGetSpecInfo:
    """Tests for get_spec_info()."""

    def test_reads_info_block(self, openapi3_doc):
        info = get_spec_info(openapi3_doc)

        assert info.title == "Users API"
        assert info.version == "2.1.0"
        assert info.dialect == DIALECT_OPENAPI

    def test_title_falls_back_to_swagger_version(self):
        info = get_spec_info({"swagger": "2.0", "paths": {}})

        assert info.title == "2.0"
        assert info.version == "-"
        assert info.dialect == DIALECT_SWAGGER

    def test_defaults_for_empty_document(self):
        info = get_spec_info({})

        assert info.title == "OpenAPI"
        assert info.version == "-"

    def test_non_dict_document(self):
        assert get_spec_info(None).to_dict() == {
            "title": "OpenAPI",
            "version": "-",
            "dialect": DIALECT_SWAGGER,
        }


class TestOpenAPIParser:
    """Test suite for OpenAPIParser.extract()."""

    @pytest.fixture
    def parser(self) -> OpenAPIParser:
        """Create an OpenAPIParser instance for testing."""
        return OpenAPIParser()

    @pytest.mark.parametrize(
        "doc",
        [
            {"openapi": "3.0.0"},
            {"openapi": "3.0.0", "paths": {}},
            {"swagger": "2.0", "paths": None},
            {"swagger": "2.0", "paths": ["/users"]},
            None,
            [],
        ],
    )
    def test_no_paths_yields_no_endpoints(self, parser, doc):
        assert parser.extract(doc) == []

    def test_extracts_swagger2_endpoints_in_document_order(self, parser, swagger2_doc):
        endpoints = parser.extract(swagger2_doc)

        assert [ep.display_name for ep in endpoints] == [
            "GET /pets",
            "POST /pets",
            "DELETE /pets/{petId}",
            "GET /health",
        ]
        assert all(isinstance(ep, EndpointDescriptor) for ep in endpoints)

    def test_path_level_parameters_list_is_not_an_endpoint(self, parser, swagger2_doc):
        endpoints = parser.extract(swagger2_doc)

        assert not any(ep.method == "PARAMETERS" for ep in endpoints)

    def test_count_matches_structured_entries(self, parser):
        doc = {
            "openapi": "3.0.0",
            "paths": {
                "/a": {"get": {}, "post": {}, "summary": "text", "servers": [{"url": "x"}]},
                "/b": "not an object",
                "/c": {"x-custom": {"note": "any mapping counts"}},
            },
        }

        endpoints = parser.extract(doc)

        assert len(endpoints) == 3
        assert endpoints[2].method == "X-CUSTOM"

    def test_methods_are_upper_cased(self, parser):
        doc = {"swagger": "2.0", "paths": {"/x": {"get": {}, "Patch": {}, "DELETE": {}}}}

        assert [ep.method for ep in parser.extract(doc)] == ["GET", "PATCH", "DELETE"]

    def test_summary_falls_back_to_operation_id(self, parser, swagger2_doc):
        endpoints = parser.extract(swagger2_doc)

        assert endpoints[0].summary == "List pets"
        assert endpoints[1].summary == "addPet"
        assert endpoints[2].summary == "Delete a pet"

    def test_missing_fields_get_defaults(self, parser):
        endpoint = parser.extract({"openapi": "3.0.0", "paths": {"/x": {"get": {}}}})[0]

        assert endpoint.summary is None
        assert endpoint.description is None
        assert endpoint.tags == []
        assert endpoint.parameters == []
        assert endpoint.request_body is None

    def test_request_body_passed_through_for_openapi_3(self, parser, openapi3_doc):
        endpoints = parser.extract(openapi3_doc)
        create_user = next(ep for ep in endpoints if ep.display_name == "POST /users")

        assert create_user.request_body == openapi3_doc["paths"]["/users"]["post"]["requestBody"]

    @pytest.mark.parametrize("version_field", [{"swagger": "2.0"}, {"openapi": "2.5"}, {}])
    def test_request_body_absent_outside_openapi_3(self, parser, version_field):
        doc = {
            **version_field,
            "paths": {"/x": {"post": {"requestBody": {"content": {}}}}},
        }

        assert parser.extract(doc)[0].request_body is None

    def test_swagger2_body_parameter_stays_in_parameters(self, parser, swagger2_doc):
        add_pet = parser.extract(swagger2_doc)[1]

        assert add_pet.parameters[0]["in"] == "body"
        assert add_pet.request_body is None

    def test_does_not_mutate_document(self, parser, openapi3_doc):
        snapshot = copy.deepcopy(openapi3_doc)

        endpoints = parser.extract(openapi3_doc)
        endpoints[0].tags.append("mutated")
        endpoints[0].parameters.append({"name": "extra"})

        assert openapi3_doc == snapshot

    def test_to_dict_excludes_raw_operation(self, parser, openapi3_doc):
        data = parser.extract(openapi3_doc)[0].to_dict()

        assert data["method"] == "GET"
        assert data["path"] == "/users"
        assert "raw_operation" not in data
