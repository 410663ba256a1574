"""Shared fixtures: a small pet store contract and a matching collection."""

import copy
from typing import Any, Dict

import pytest

from contract_suite.application import ContractTestSuite
from contract_suite.config.settings import Settings
from contract_suite.core.config_loader import parse_suite_config
from contract_suite.core.oas_parser import OpenApiParser
from contract_suite.core.postman_parser import PostmanParser
from contract_suite.schemas.postman import PmCollection

PET_STORE: Dict[str, Any] = {
    "openapi": "3.0.3",
    "info": {"title": "Pet Store", "version": "1.0.0"},
    "paths": {
        "/pets": {
            "get": {
                "operationId": "listPets",
                "responses": {
                    "200": {
                        "description": "A list of pets",
                        "headers": {"x-next": {"schema": {"type": "string"}}},
                        "content": {
                            "application/json": {
                                "schema": {
                                    "type": "array",
                                    "items": {"$ref": "#/components/schemas/Pet"},
                                }
                            }
                        },
                    },
                    "default": {"description": "Unexpected error"},
                },
            },
            "post": {
                "operationId": "createPet",
                "requestBody": {
                    "content": {
                        "application/json": {
                            "schema": {"$ref": "#/components/schemas/Pet"}
                        }
                    }
                },
                "responses": {
                    "201": {
                        "description": "Created",
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/Pet"}
                            }
                        },
                    },
                    "400": {"$ref": "#/components/responses/BadRequest"},
                },
            },
        },
        "/pets/{petId}": {
            "parameters": [
                {
                    "name": "petId",
                    "in": "path",
                    "required": True,
                    "schema": {"type": "integer"},
                }
            ],
            "get": {
                "operationId": "getPet",
                "responses": {
                    "200": {
                        "description": "A pet",
                        "headers": {"X-Rate-Limit": {"schema": {"type": "integer"}}},
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/Pet"}
                            }
                        },
                    },
                    "404": {
                        "description": "Not found",
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/Error"}
                            }
                        },
                    },
                },
            },
            "delete": {
                "operationId": "deletePet",
                "responses": {"204": {"description": "Deleted"}},
            },
        },
    },
    "components": {
        "schemas": {
            "Pet": {
                "type": "object",
                "required": ["id"],
                "properties": {
                    "id": {"type": "integer", "format": "int64"},
                    "name": {"type": "string"},
                    "tag": {"type": "string"},
                },
            },
            "Error": {
                "type": "object",
                "properties": {"message": {"type": "string"}},
            },
        },
        "responses": {
            "BadRequest": {
                "description": "Bad request",
                "content": {
                    "application/json": {
                        "schema": {"$ref": "#/components/schemas/Error"}
                    }
                },
            }
        },
    },
}


def _request(method: str, path, variables=None, **extra) -> Dict[str, Any]:
    request = {
        "method": method,
        "header": [{"key": "Accept", "value": "application/json"}],
        "url": {
            "raw": "{{baseUrl}}/" + "/".join(path),
            "host": ["{{baseUrl}}"],
            "path": list(path),
            "variable": list(variables or []),
        },
    }
    request.update(extra)
    return request


PET_COLLECTION: Dict[str, Any] = {
    "info": {
        "_postman_id": "4a0c5b5e-0000-4000-8000-000000000000",
        "name": "Pet Store",
        "schema": "https://schema.getpostman.com/json/collection/v2.1.0/collection.json",
    },
    "item": [
        {
            "name": "pets",
            "item": [
                {
                    "id": "list-pets",
                    "name": "List pets",
                    "request": _request("GET", ["pets"]),
                },
                {
                    "id": "create-pet",
                    "name": "Create pet",
                    "request": _request(
                        "POST",
                        ["pets"],
                        body={
                            "mode": "raw",
                            "raw": '{\n  "name": "Rex",\n  "tag": "dog"\n}',
                            "options": {"raw": {"language": "json"}},
                        },
                    ),
                },
                {
                    "id": "get-pet",
                    "name": "Get pet",
                    "request": _request(
                        "GET", ["pets", ":petId"], [{"key": "petId", "value": "1"}]
                    ),
                    "protocolProfileBehavior": {"disableBodyPruning": True},
                },
                {
                    "id": "delete-pet",
                    "name": "Delete pet",
                    "request": _request("DELETE", ["pets", ":petId"]),
                },
            ],
        },
        {
            "id": "health",
            "name": "Health",
            "request": _request("GET", ["health"]),
        },
    ],
    "variable": [{"key": "baseUrl", "value": "http://localhost:8080"}],
}


@pytest.fixture
def oas_document() -> Dict[str, Any]:
    return copy.deepcopy(PET_STORE)


@pytest.fixture
def collection_data() -> Dict[str, Any]:
    return copy.deepcopy(PET_COLLECTION)


@pytest.fixture
def oas_parser(oas_document) -> OpenApiParser:
    return OpenApiParser(oas_document)


@pytest.fixture
def collection(collection_data) -> PmCollection:
    return PmCollection.model_validate(collection_data)


@pytest.fixture
def postman_parser(collection, oas_parser) -> PostmanParser:
    return PostmanParser(collection, oas_parser)


@pytest.fixture
def make_suite(oas_parser, collection_data):
    """Build a suite over a fresh collection from a camelCase config dict."""

    def factory(config: Dict[str, Any] = None, **settings_values) -> ContractTestSuite:
        parser = PostmanParser(
            PmCollection.model_validate(copy.deepcopy(collection_data)), oas_parser
        )
        return ContractTestSuite(
            oas_parser,
            parser,
            parse_suite_config(config or {}),
            settings=Settings(**settings_values),
        )

    return factory


@pytest.fixture
def find_record():
    def lookup(parser: PostmanParser, identifier: str):
        return next(r for r in parser.mapped_operations if r.id == identifier)

    return lookup
