"""Tests for the parser registry."""

import pytest

from dddgen.codegen.core.errors import ArgumentError, NoEntitiesError, ValidationError
from dddgen.codegen.core.parser import DomainParser
from dddgen.codegen.formats.openapi import OpenAPIParser
from dddgen.codegen.formats.protobuf import ProtobufParser
from dddgen.codegen.registry import ParserRegistry, default_registry


class EmptyExtensionParser(DomainParser):
    def supported_extensions(self):
        return {".erd", ""}

    def format_name(self):
        return "ERD"

    def validate(self, file_path):
        pass

    def parse(self, file_path):
        raise NotImplementedError


class RejectingYamlParser(DomainParser):
    def supported_extensions(self):
        return {".yaml"}

    def format_name(self):
        return "AsyncAPI"

    def validate(self, file_path):
        raise ValidationError("not an AsyncAPI document")

    def parse(self, file_path):
        raise NotImplementedError


class TestParserRegistry:
    """Test suite for ParserRegistry."""

    def test_default_registry_formats(self):
        registry = default_registry()

        assert registry.list_formats() == ["OpenAPI", "Protocol Buffers"]
        assert registry.list_extensions("OpenAPI") == [".json", ".yaml", ".yml"]
        assert registry.list_aliases("Protocol Buffers") == ["proto", "protobuf"]

    @pytest.mark.parametrize(
        "path, parser_class",
        [
            ("api.yaml", OpenAPIParser),
            ("API.YML", OpenAPIParser),
            ("api.json", OpenAPIParser),
            ("user.proto", ProtobufParser),
        ],
    )
    def test_get_parser_by_extension(self, path, parser_class):
        assert isinstance(default_registry().get_parser(path), parser_class)

    def test_get_parser_unknown_extension(self):
        with pytest.raises(ValidationError):
            default_registry().get_parser("schema.graphql")

    def test_get_parser_for_type(self):
        registry = default_registry()

        assert isinstance(registry.get_parser_for_type("OpenAPI"), OpenAPIParser)
        assert isinstance(registry.get_parser_for_type("proto"), ProtobufParser)
        with pytest.raises(ArgumentError):
            registry.get_parser_for_type("erd")

    def test_register_empty_extension_raises(self):
        registry = ParserRegistry()

        with pytest.raises(ArgumentError):
            registry.register(EmptyExtensionParser())

        assert registry.list_formats() == []

    def test_registries_are_independent(self):
        first = ParserRegistry()
        first.register(OpenAPIParser())

        second = ParserRegistry()

        assert first.is_supported("api.yaml")
        assert not second.is_supported("api.yaml")

    def test_reregistering_keeps_single_format_entry(self):
        registry = ParserRegistry()
        parser = OpenAPIParser()

        registry.register(parser)
        registry.register(parser)

        assert registry.list_formats() == ["OpenAPI"]

    def test_detect_format_validates(self, user_openapi_file, temp_dir):
        registry = default_registry()

        assert isinstance(registry.detect_format(user_openapi_file), OpenAPIParser)

        plain = temp_dir / "plain.yaml"
        plain.write_text("openapi: 3.0.0\ncomponents:\n  schemas:\n    A: {type: object}\n")
        with pytest.raises(NoEntitiesError):
            registry.detect_format(plain)

    def test_detect_format_tries_each_adapter(self, user_openapi_file):
        # Arrange
        registry = default_registry()
        registry.register(RejectingYamlParser())

        # Act
        parser = registry.detect_format(user_openapi_file)

        # Assert
        assert registry.get_parser(user_openapi_file).format_name() == "AsyncAPI"
        assert isinstance(parser, OpenAPIParser)

    def test_detect_format_raises_extension_adapter_failure(self, temp_dir):
        registry = ParserRegistry()
        registry.register(RejectingYamlParser())
        path = temp_dir / "events.yaml"
        path.write_text("asyncapi: 2.6.0\n")

        with pytest.raises(ValidationError) as exc_info:
            registry.detect_format(path)

        assert "AsyncAPI" in exc_info.value.message

    def test_detect_format_unknown_extension(self, temp_dir):
        path = temp_dir / "schema.graphql"
        path.write_text("type A {}\n")

        with pytest.raises(ValidationError):
            default_registry().detect_format(path)
