"""End-to-end tests for CodeGenerationPipeline."""

import threading
from unittest.mock import MagicMock, patch

import pytest
from rich.console import Console

from dddgen.codegen.core.errors import (
    ArgumentError,
    FileSystemError,
    GenerationError,
    NoEntitiesError,
    ValidationError,
)
from dddgen.executor import FileExecutor
from dddgen.pipeline import CodeGenerationPipeline


@pytest.fixture
def pipeline():
    return CodeGenerationPipeline(executor=FileExecutor(Console(record=True)))


class TestGenerate:
    """Test suite for generating components from documents."""

    def test_generate_from_openapi(self, pipeline, user_openapi_file, temp_dir):
        # Arrange
        destination = temp_dir / "service"

        # Act
        result = pipeline.generate(user_openapi_file, destination)

        # Assert
        assert result.entity_count == 1
        assert result.written_count == 14
        assert result.preserved == []
        entity_source = (destination / "internal" / "domain" / "user.go").read_text()
        assert "type User struct {" in entity_source
        assert (destination / "internal" / "infrastructure" / "user_repository.go").exists()

    def test_regenerating_preserves_edited_files(self, pipeline, user_openapi_file, temp_dir):
        # Arrange
        destination = temp_dir / "service"
        pipeline.generate(user_openapi_file, destination)
        edited = destination / "internal" / "domain" / "user.go"
        edited.write_text("// hand edited\n")

        # Act
        result = pipeline.generate(user_openapi_file, destination)

        # Assert
        assert result.written_count == 0
        assert result.preserved_count == 14
        assert edited.read_text() == "// hand edited\n"

    def test_overwrite_when_preservation_disabled(self, pipeline, user_openapi_file, temp_dir):
        destination = temp_dir / "service"
        pipeline.generate(user_openapi_file, destination)
        edited = destination / "internal" / "domain" / "user.go"
        edited.write_text("// hand edited\n")

        pipeline.generate(user_openapi_file, destination, preserve_existing=False)

        assert "type User struct {" in edited.read_text()

    def test_dry_run_writes_nothing(self, pipeline, user_openapi_file, temp_dir):
        destination = temp_dir / "service"

        result = pipeline.generate(user_openapi_file, destination, dry_run=True)

        assert result.written_count == 14
        assert not destination.exists()

    def test_format_detected_by_validation(self, pipeline, user_openapi_file, temp_dir):
        with patch.object(
            pipeline.registry, "detect_format", wraps=pipeline.registry.detect_format
        ) as detect:
            result = pipeline.generate(user_openapi_file, temp_dir / "out")

        detect.assert_called_once_with(user_openapi_file)
        assert result.entity_count == 1

    def test_explicit_input_type(self, pipeline, temp_dir, user_openapi_file):
        with pytest.raises(ArgumentError):
            pipeline.generate(user_openapi_file, temp_dir / "out", input_type="erd")

    def test_unsupported_extension(self, pipeline, temp_dir):
        path = temp_dir / "schema.graphql"
        path.write_text("type User { id: ID }\n")

        with pytest.raises(ValidationError):
            pipeline.generate(path, temp_dir / "out")

    def test_missing_input(self, pipeline, temp_dir):
        with pytest.raises(FileSystemError):
            pipeline.generate(temp_dir / "missing.yaml", temp_dir / "out")

    def test_no_entities_writes_nothing(self, pipeline, temp_dir):
        path = temp_dir / "plain.yaml"
        path.write_text("openapi: 3.0.0\ncomponents:\n  schemas:\n    A: {type: object}\n")

        with pytest.raises(NoEntitiesError):
            pipeline.generate(path, temp_dir / "out")

        assert not (temp_dir / "out").exists()

    def test_cancellation(self, pipeline, user_openapi_file, temp_dir):
        cancel = threading.Event()
        cancel.set()

        with pytest.raises(GenerationError):
            pipeline.generate(user_openapi_file, temp_dir / "out", cancel=cancel)

    def test_generate_from_url(self, pipeline, user_openapi_file, temp_dir):
        # Arrange
        response = MagicMock(content=user_openapi_file.read_bytes())
        response.raise_for_status.return_value = None

        with patch("dddgen.utils.requests.get", return_value=response) as get:
            # Act
            result = pipeline.generate("https://example.com/specs/users.yaml", temp_dir / "out")

        # Assert
        get.assert_called_once()
        assert result.entity_count == 1
        assert (temp_dir / "out" / "internal" / "domain" / "user.go").exists()

    def test_generate_from_proto(self, pipeline, user_proto_file, temp_dir):
        pytest.importorskip("grpc_tools")

        result = pipeline.generate(user_proto_file, temp_dir / "out", input_type="proto")

        assert result.entity_count == 2
        assert (temp_dir / "out" / "internal" / "domain" / "profile.go").exists()
        assert not (temp_dir / "out" / "internal" / "domain" / "getuserrequest.go").exists()


class TestCreateProject:
    """Test suite for project scaffolding."""

    def test_new_project(self, pipeline, temp_dir):
        # Arrange
        destination = temp_dir / "my-service"

        # Act
        result = pipeline.create_project("my-service", destination)

        # Assert
        assert result.written_count == 5
        assert (destination / "go.mod").read_text().startswith("module my-service\n")
        assert (destination / "cmd" / "my-service" / "main.go").exists()
        assert (destination / "config.yaml.example").exists()

    def test_existing_files_are_preserved(self, pipeline, temp_dir):
        # Arrange
        (temp_dir / "README.md").write_text("# Existing\n")

        # Act
        result = pipeline.create_project("shop", temp_dir, preserve_existing=True)

        # Assert
        assert result.preserved == ["README.md"]
        assert result.written_count == 4
        assert (temp_dir / "README.md").read_text() == "# Existing\n"

    def test_invalid_project_name(self, pipeline, temp_dir):
        with pytest.raises(ValidationError):
            pipeline.create_project("bad name", temp_dir / "x")

    def test_clone_then_preserve(self, temp_dir):
        # Arrange
        destination = temp_dir / "repo"
        cloner = MagicMock()

        def fake_clone(url, target):
            target.mkdir()
            (target / ".git").mkdir()
            (target / "go.mod").write_text("module github.com/acme/repo\n")
            return target

        cloner.clone.side_effect = fake_clone
        pipeline = CodeGenerationPipeline(executor=FileExecutor(Console(record=True)), cloner=cloner)

        # Act
        result = pipeline.create_project("repo", destination, repo_url="https://example.com/repo.git")

        # Assert
        cloner.clone.assert_called_once_with("https://example.com/repo.git", destination)
        assert result.preserved == ["go.mod"]
        assert (destination / "go.mod").read_text() == "module github.com/acme/repo\n"

    def test_dry_run_does_not_clone(self, temp_dir):
        cloner = MagicMock()
        pipeline = CodeGenerationPipeline(executor=FileExecutor(Console(record=True)), cloner=cloner)

        result = pipeline.create_project("repo", temp_dir / "repo", dry_run=True, repo_url="https://example.com/repo.git")

        cloner.clone.assert_not_called()
        assert result.written_count == 5
        assert not (temp_dir / "repo").exists()
