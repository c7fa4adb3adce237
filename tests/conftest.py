"""Pytest configuration and shared fixtures for openapi-client-httpx tests."""

import copy

import pytest

from openapi_client_httpx import OpenAPIClient
from openapi_client_httpx.testing import RecordingRunner

PET_ID = {"name": "petId", "in": "path", "required": True, "schema": {"type": "integer"}}
OWNER_ID = {"name": "ownerId", "in": "path", "required": True, "schema": {"type": "integer"}}
PETSHOP_ID = {"name": "x-petshop-id", "in": "header", "schema": {"type": "string"}}

RESPONSES = {"200": {"description": "ok"}}

PETSTORE = {
    "openapi": "3.0.0",
    "info": {"title": "api", "version": "1.0.0"},
    "servers": [
        {"url": "http://localhost:8080"},
        {"url": "http://localhost:9090/", "description": "Alternative server"},
        {
            "url": "http://{foo1}.localhost:9090/{foo2}/{foo3}/",
            "description": "server with variable baseURL",
            "variables": {
                "foo1": {"default": "bar1", "enum": ["bar1", "bar1a"]},
                "foo2": {"default": "bar2b", "enum": ["bar2a", "bar2b"]},
                "foo3": {"default": "bar3a", "enum": ["bar3a", "bar3b"]},
            },
        },
    ],
    "paths": {
        "/pets": {
            "get": {
                "operationId": "getPets",
                "responses": {"200": {"$ref": "#/components/responses/PetsListRes"}},
                "parameters": [
                    {"name": "q", "in": "query", "schema": {"type": "array", "items": {"type": "string"}}},
                ],
            },
            "post": {
                "operationId": "createPet",
                "responses": {"201": {"$ref": "#/components/responses/PetRes"}},
            },
        },
        "/pets/{petId}": {
            "get": {
                "operationId": "getPetById",
                "responses": {"200": {"$ref": "#/components/responses/PetRes"}},
                "parameters": [PETSHOP_ID],
            },
            "put": {"operationId": "replacePetById", "responses": RESPONSES},
            "patch": {"operationId": "updatePetById", "responses": RESPONSES},
            "delete": {"operationId": "deletePetById", "responses": RESPONSES},
            "parameters": [PET_ID],
        },
        "/pets/{petId}/owner": {
            "get": {"operationId": "getOwnerByPetId", "responses": RESPONSES},
            "parameters": [PET_ID],
        },
        "/pets/{petId}/owner/{ownerId}": {
            "get": {"operationId": "getPetOwner", "responses": RESPONSES},
            "parameters": [PET_ID, OWNER_ID],
        },
        "/pets/meta": {
            "get": {"operationId": "getPetsMeta", "responses": RESPONSES},
        },
        "/pets/relative": {
            "servers": [{"url": "http://localhost:8080/v2"}],
            "get": {"operationId": "getPetsRelative", "responses": RESPONSES},
        },
        "/health": {
            "get": {"responses": RESPONSES},
        },
    },
    "components": {
        "schemas": {
            "PetWithName": {
                "type": "object",
                "properties": {
                    "id": {"type": "integer", "minimum": 1},
                    "name": {"type": "string", "example": "Garfield"},
                },
            },
        },
        "responses": {
            "PetRes": {
                "description": "ok",
                "content": {"application/json": {"schema": {"$ref": "#/components/schemas/PetWithName"}}},
            },
            "PetsListRes": {
                "description": "ok",
                "content": {
                    "application/json": {
                        "schema": {"type": "array", "items": {"$ref": "#/components/schemas/PetWithName"}}
                    }
                },
            },
        },
    },
}


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear test-related environment variables before each test.

    This prevents test pollution when testing setting resolution.
    """
    import os

    test_prefixes = ("TEST_", "API_", "CLIENT_", "OPENAPI_")

    for key in list(os.environ.keys()):
        if any(key.startswith(prefix) for prefix in test_prefixes):
            monkeypatch.delenv(key, raising=False)

    yield


@pytest.fixture
def definition():
    """A fresh copy of the petstore definition (tests may mutate it)."""
    return copy.deepcopy(PETSTORE)


@pytest.fixture
def api(definition):
    """An initialized client over the petstore definition."""
    return OpenAPIClient(definition).init_sync()


@pytest.fixture
def recorder(api):
    """A RecordingRunner registered as the api's default runner."""
    runner = RecordingRunner(json={"id": 1, "name": "Garfield"})
    api.register_runner(runner.as_runner())
    return runner
