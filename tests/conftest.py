"""Pytest configuration and shared fixtures for dddgen tests."""

import tempfile
import textwrap
from collections.abc import Generator
from pathlib import Path

import pytest

from dddgen.codegen.core.config import GeneratorConfig
from dddgen.codegen.core.generator import ComponentFactory
from dddgen.codegen.core.model import Entity, Property
from dddgen.codegen.core.templates import create_template_engine

USER_OPENAPI = textwrap.dedent(
    """\
    openapi: 3.0.3
    info:
      title: User Service
      version: 1.0.0
    paths: {}
    components:
      schemas:
        User:
          type: object
          x-aggregate: true
          required: [email, name]
          properties:
            id:
              type: string
              format: uuid
            email:
              type: string
              format: email
            name:
              type: string
            age:
              type: integer
    """
)

ORDER_OPENAPI = textwrap.dedent(
    """\
    openapi: 3.0.3
    info:
      title: Order Service
      version: 1.0.0
    paths: {}
    components:
      schemas:
        Order:
          type: object
          x-aggregate: true
          required: [customer, status]
          properties:
            customer:
              $ref: '#/components/schemas/Customer'
            items:
              type: array
              items:
                $ref: '#/components/schemas/LineItem'
            status:
              type: string
              minLength: 1
              maxLength: 20
              default: pending
            total:
              type: number
              format: double
              minimum: 0
            tags:
              type: array
              items:
                type: string
        Customer:
          type: object
          x-aggregate: "true"
          required: [name]
          properties:
            name:
              type: string
            createdAt:
              type: string
              format: date-time
        LineItem:
          type: object
          properties:
            sku:
              type: string
            quantity:
              type: integer
              format: int32
    """
)

USER_PROTO = textwrap.dedent(
    """\
    syntax = "proto3";

    package users.v1;

    import "google/protobuf/timestamp.proto";

    option go_package = "github.com/acme/users/gen;usersv1";

    message User {
      string id = 1;
      string email = 2;
      google.protobuf.Timestamp created_at = 3;
      repeated string roles = 4;
      Profile profile = 5;
      map<string, string> labels = 6;
    }

    message Profile {
      string display_name = 1;
      int64 login_count = 2;
    }

    message GetUserRequest {
      string id = 1;
    }

    message GetUserResponse {
      User user = 1;
    }

    service UserService {
      rpc GetUser(GetUserRequest) returns (GetUserResponse);
    }
    """
)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing.

    Yields:
        Path to the temporary directory
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def write_file(directory: Path, name: str, content: str) -> Path:
    path = directory / name
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def user_openapi_file(temp_dir: Path) -> Path:
    """OpenAPI document with a single User aggregate."""
    return write_file(temp_dir, "users.yaml", USER_OPENAPI)


@pytest.fixture
def order_openapi_file(temp_dir: Path) -> Path:
    """OpenAPI document with two aggregates and one plain schema."""
    return write_file(temp_dir, "orders.yaml", ORDER_OPENAPI)


@pytest.fixture
def user_proto_file(temp_dir: Path) -> Path:
    """Proto file with domain messages, RPC envelopes and a service."""
    return write_file(temp_dir, "users.proto", USER_PROTO)


@pytest.fixture
def user_entity() -> Entity:
    """User entity without an identity property."""
    return Entity(
        name="User",
        properties=[
            Property("Email", "string", required=True, validation="email", tags={"json": "email"}),
            Property("Name", "string", required=True, tags={"json": "name"}),
            Property("Age", "int", tags={"json": "age"}),
            Property("CreatedAt", "time", tags={"json": "created_at"}),
        ],
    )


@pytest.fixture
def factory() -> ComponentFactory:
    """Component factory over the bundled templates."""
    return ComponentFactory(create_template_engine(), GeneratorConfig())
