"""Tests for operation flattening and lookup."""

import logging

import pytest

from openapi_client_httpx.operations import OperationCatalog, get_operation, get_operations
from openapi_client_httpx.types import HttpMethod, ParamType


class TestGetOperations:
    @pytest.mark.unit
    def test_flattens_every_method(self, definition):
        operations = get_operations(definition)
        assert [(op.method.value, op.path) for op in operations] == [
            ("get", "/pets"),
            ("post", "/pets"),
            ("get", "/pets/{petId}"),
            ("put", "/pets/{petId}"),
            ("patch", "/pets/{petId}"),
            ("delete", "/pets/{petId}"),
            ("get", "/pets/{petId}/owner"),
            ("get", "/pets/{petId}/owner/{ownerId}"),
            ("get", "/pets/meta"),
            ("get", "/pets/relative"),
            ("get", "/health"),
        ]

    @pytest.mark.unit
    def test_method_order_is_fixed(self):
        document = {"paths": {"/x": {"delete": {}, "get": {}, "trace": {}, "post": {}}}}
        assert [op.method for op in get_operations(document)] == [
            HttpMethod.GET,
            HttpMethod.POST,
            HttpMethod.DELETE,
            HttpMethod.TRACE,
        ]

    @pytest.mark.unit
    def test_path_parameters_appended_after_operation_parameters(self, definition):
        operation = get_operation(definition, "getPetById")
        assert [param.name for param in operation.parameters] == ["x-petshop-id", "petId"]
        assert operation.parameters[1].location == ParamType.PATH
        assert operation.parameters[1].required is True

    @pytest.mark.unit
    def test_operation_parameters_shadow_path_parameters(self):
        document = {
            "paths": {
                "/items/{id}": {
                    "parameters": [{"name": "id", "in": "path", "required": True}],
                    "get": {"operationId": "getItem", "parameters": [{"name": "id", "in": "query"}]},
                }
            }
        }
        operation = get_operation(document, "getItem")
        assert operation.find_parameter("id").location == ParamType.QUERY

    @pytest.mark.unit
    def test_path_servers_appended(self, definition):
        definition["paths"]["/pets/relative"]["get"]["servers"] = [{"url": "http://op.example.com"}]
        operation = get_operation(definition, "getPetsRelative")
        assert [server.url for server in operation.servers] == ["http://op.example.com", "http://localhost:8080/v2"]

    @pytest.mark.unit
    def test_security_falls_back_to_document(self, definition):
        definition["security"] = [{"apiKey": []}]
        definition["paths"]["/pets"]["post"]["security"] = []

        assert get_operation(definition, "getPets").security == ({"apiKey": []},)
        assert get_operation(definition, "createPet").security == ()

    @pytest.mark.unit
    def test_non_method_keys_are_skipped(self):
        document = {
            "paths": {
                "/x": {
                    "summary": "not an operation",
                    "x-internal": {"get": {}},
                    "parameters": [],
                    "get": {"operationId": "getX"},
                }
            }
        }
        assert [op.operation_id for op in get_operations(document)] == ["getX"]

    @pytest.mark.unit
    def test_raw_fields_kept_in_spec(self, definition):
        operation = get_operation(definition, "getPets")
        assert operation.spec["operationId"] == "getPets"
        assert operation.spec["path"] == "/pets"
        assert operation.spec["method"] == "get"
        assert "responses" in operation.spec

    @pytest.mark.unit
    def test_operation_without_id(self, definition):
        health = [op for op in get_operations(definition) if op.path == "/health"][0]
        assert health.operation_id is None

    @pytest.mark.unit
    def test_empty_document(self):
        assert get_operations(None) == []
        assert get_operations({}) == []

    @pytest.mark.unit
    def test_input_document_not_mutated(self, definition):
        before = repr(definition)
        get_operations(definition)
        assert repr(definition) == before


class TestGetOperation:
    @pytest.mark.unit
    def test_found(self, definition):
        operation = get_operation(definition, "getPetOwner")
        assert operation.method == HttpMethod.GET
        assert operation.path == "/pets/{petId}/owner/{ownerId}"

    @pytest.mark.unit
    def test_not_found(self, definition):
        assert get_operation(definition, "nope") is None

    @pytest.mark.unit
    def test_first_parameter_prefers_required(self, definition):
        operation = get_operation(definition, "getPetById")
        assert operation.first_parameter().name == "petId"

    @pytest.mark.unit
    def test_first_parameter_without_required(self, definition):
        assert get_operation(definition, "getPets").first_parameter().name == "q"
        assert get_operation(definition, "createPet").first_parameter() is None


class TestOperationCatalog:
    @pytest.mark.unit
    def test_flattens_once(self, definition):
        catalog = OperationCatalog(definition)
        assert catalog.operations is catalog.operations
        assert len(catalog) == 11

    @pytest.mark.unit
    def test_get_and_find(self, definition):
        catalog = OperationCatalog(definition)
        assert catalog.get("deletePetById") is catalog.find("/pets/{petId}", "DELETE")
        assert catalog.get("nope") is None
        assert catalog.find("/pets", "trace") is None

    @pytest.mark.unit
    def test_by_path(self, definition):
        grouped = OperationCatalog(definition).by_path()
        assert list(grouped["/pets"]) == [HttpMethod.GET, HttpMethod.POST]
        assert grouped["/health"][HttpMethod.GET].operation_id is None

    @pytest.mark.unit
    def test_duplicate_operation_id_keeps_first(self, caplog):
        document = {
            "paths": {
                "/a": {"get": {"operationId": "dup"}},
                "/b": {"get": {"operationId": "dup"}},
            }
        }
        with caplog.at_level(logging.WARNING):
            catalog = OperationCatalog(document)
            assert catalog.get("dup").path == "/a"

        assert "Duplicate operationId 'dup'" in caplog.text
