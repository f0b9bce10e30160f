"""Tests for the Protocol Buffers format adapter."""

import textwrap

import pytest

pytest.importorskip("grpc_tools")

from google.protobuf.descriptor_pb2 import FieldDescriptorProto  # noqa: E402

from dddgen.codegen.core.generator import ComponentFactory  # noqa: E402
from dddgen.codegen.core.errors import NoEntitiesError, ParseError, ValidationError  # noqa: E402
from dddgen.codegen.core.model import RelationType  # noqa: E402
from dddgen.codegen.formats.protobuf import ProtobufParser  # noqa: E402
from dddgen.codegen.formats.protobuf import types  # noqa: E402


def write_proto(directory, body, name="domain.proto"):
    path = directory / name
    path.write_text('syntax = "proto3";\n\npackage test;\n\n' + textwrap.dedent(body))
    return path


class TestProtobufTypes:
    """Test suite for proto field mapping helpers."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("GetUserRequest", True),
            ("GetUserResponse", True),
            ("ListReq", True),
            ("ListResp", True),
            ("AuditRequest", True),
            ("ResetPasswordRequestLog", False),
            ("User", False),
            ("getuserrequest", False),
        ],
    )
    def test_is_request_response(self, name, expected):
        assert types.is_request_response(name) is expected

    def test_field_name(self):
        assert types.field_name("user_id") == "UserId"
        assert types.field_name("id") == "Id"
        assert types.field_name("display_name") == "DisplayName"

    def test_message_name(self):
        assert types.message_name(".users.v1.Profile") == "Profile"

    def test_well_known_type(self):
        assert types.well_known_type(".google.protobuf.Timestamp") == "time"
        assert types.well_known_type(".google.protobuf.Struct") == "map"
        assert types.well_known_type(".google.protobuf.Duration") == "any"
        assert types.well_known_type(".test.Profile") is None

    def test_protobuf_tag(self):
        field = FieldDescriptorProto(
            name="roles",
            number=4,
            type=FieldDescriptorProto.TYPE_STRING,
            label=FieldDescriptorProto.LABEL_REPEATED,
        )

        assert types.protobuf_tag(field) == "bytes,4,rep,name=roles"

    def test_protobuf_tag_varint(self):
        field = FieldDescriptorProto(
            name="count",
            number=2,
            type=FieldDescriptorProto.TYPE_INT64,
            label=FieldDescriptorProto.LABEL_OPTIONAL,
        )

        assert types.protobuf_tag(field) == "varint,2,opt,name=count"

    @pytest.mark.parametrize(
        "go_package, package, stem, expected",
        [
            ("github.com/acme/users/gen;usersv1", "users.v1", "users", "gen"),
            ("github.com/acme/orders", "", "orders", "orders"),
            ("", "acme.billing", "billing", "acme-billing"),
            ("", "", "schema", "schema"),
        ],
    )
    def test_project_name(self, go_package, package, stem, expected):
        assert types.project_name(go_package, package, stem) == expected


class TestProtobufParser:
    """Test suite for ProtobufParser."""

    @pytest.fixture
    def parser(self):
        return ProtobufParser()

    def test_metadata(self, parser):
        assert parser.format_name() == "Protocol Buffers"
        assert parser.supported_extensions() == {".proto"}

    def test_roles_scenario(self, parser, temp_dir):
        # Arrange
        path = write_proto(
            temp_dir,
            """\
            message User {
              string id = 1;
              repeated string roles = 4;
            }
            """,
        )

        # Act
        model = parser.parse(path)

        # Assert
        user = model.get_entity("User")
        assert user.get_property("Roles").type == "[]string"
        assert user.get_property("Roles").required is False
        assert user.get_property("Id").required is True

    def test_request_response_messages_are_skipped(self, parser, user_proto_file):
        model = parser.parse(user_proto_file)

        assert model.entity_names == ["User", "Profile"]
        assert model.get_entity("GetUserRequest") is None
        assert model.get_entity("GetUserResponse") is None

    def test_field_mapping(self, parser, user_proto_file):
        # Act
        user = parser.parse(user_proto_file).get_entity("User")

        # Assert
        assert [p.name for p in user.properties] == ["Id", "Email", "CreatedAt", "Roles", "Profile", "Labels"]
        assert user.get_property("CreatedAt").type == "time"
        assert user.get_property("Profile").type == "Profile"
        assert user.get_property("Labels").type == "map"
        assert user.get_property("Labels").required is False
        email = user.get_property("Email")
        assert email.tags == {"json": "email", "protobuf": "bytes,2,opt,name=email", "validate": "required"}
        assert email.metadata["proto_number"] == 2

    def test_relations(self, parser, user_proto_file):
        model = parser.parse(user_proto_file)

        assert len(model.relations) == 1
        relation = model.relations[0]
        assert (relation.from_entity, relation.to_entity) == ("User", "Profile")
        assert relation.type is RelationType.ONE_TO_ONE
        assert relation.metadata["property_name"] == "Profile"

    def test_repeated_message_is_one_to_many(self, parser, temp_dir):
        path = write_proto(
            temp_dir,
            """\
            message Order {
              repeated LineItem items = 1;
            }

            message LineItem {
              string sku = 1;
            }
            """,
        )

        model = parser.parse(path)

        assert model.get_entity("Order").get_property("Items").type == "[]LineItem"
        assert model.relations[0].type is RelationType.ONE_TO_MANY

    def test_model_metadata(self, parser, user_proto_file):
        model = parser.parse(user_proto_file)

        assert model.project_name == "gen"
        assert model.metadata["source_format"] == "protobuf"
        assert model.metadata["package"] == "users.v1"
        assert model.metadata["services"] == [
            {
                "name": "UserService",
                "methods": [
                    {"name": "GetUser", "input_type": "GetUserRequest", "output_type": "GetUserResponse"}
                ],
            }
        ]

    def test_only_envelopes_raises(self, parser, temp_dir):
        path = write_proto(
            temp_dir,
            """\
            message PingRequest {
              string id = 1;
            }

            message PingResponse {
              bool ok = 1;
            }
            """,
        )

        with pytest.raises(NoEntitiesError):
            parser.validate(path)

    def test_syntax_error_raises(self, parser, temp_dir):
        path = write_proto(temp_dir, "message User {\n  string id = ;\n}\n")

        with pytest.raises(ParseError):
            parser.parse(path)

    def test_wrong_extension_raises(self, parser, temp_dir):
        path = temp_dir / "user.txt"
        path.write_text("message User {}\n")

        with pytest.raises(ValidationError):
            parser.parse(path)

    def test_required_field_renders_single_validate_rule(self, parser, temp_dir):
        # Arrange
        path = write_proto(
            temp_dir,
            """\
            message User {
              string id = 1;
              string email = 2;
              repeated string roles = 4;
            }
            """,
        )
        model = parser.parse(path)

        # Act
        content = ComponentFactory().generate_entity(model.get_entity("User")).content

        # Assert
        assert model.get_entity("User").get_property("Email").validation is None
        assert "\tEmail string `json:\"email\" validate:\"required\"`" in content
        assert "required,required" not in content

    def test_map_field_entity_generates_full_batch(self, parser, user_proto_file):
        model = parser.parse(user_proto_file)

        files = ComponentFactory().generate_model(model)

        entity_test = next(f for f in files if f.path == "internal/domain/user_test.go")
        assert "map[string]interface{}{}" in entity_test.content
