"""
Protocol Buffers format adapter.

The ``.proto`` file is compiled by protoc (bundled with grpcio-tools) into
a ``FileDescriptorSet``; top-level messages that are not RPC envelopes
become entities.
"""

import subprocess
import sys
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple, Union

import grpc_tools
from google.protobuf import descriptor_pb2
from google.protobuf.descriptor_pb2 import DescriptorProto, FieldDescriptorProto, FileDescriptorProto
from google.protobuf.message import DecodeError

from ....logging_config import get_logger
from ...core import model
from ...core.errors import NoEntitiesError, ParseError
from ...core.model import DomainModel, Entity, Property, Relation, RelationType
from ...core.parser import DomainParser
from . import types

logger = get_logger(__name__)

WELL_KNOWN_INCLUDE = Path(grpc_tools.__file__).parent / "_proto"


def compile_descriptor(path: Path) -> FileDescriptorProto:
    """
    Compile a .proto file and return its descriptor.

    Raises:
        ParseError: protoc rejected the file or produced no descriptor
    """
    path = path.resolve()
    with tempfile.TemporaryDirectory(prefix="dddgen-proto-") as tmp:
        output = Path(tmp) / "descriptor.pb"
        command = [
            sys.executable,
            "-m",
            "grpc_tools.protoc",
            f"-I{path.parent}",
            f"-I{WELL_KNOWN_INCLUDE}",
            f"--descriptor_set_out={output}",
            str(path),
        ]
        logger.debug("Running protoc for %s", path)
        try:
            result = subprocess.run(command, capture_output=True, text=True, check=False)
        except OSError as e:
            raise ParseError(f"cannot run protoc for {path}", e) from e

        if result.returncode != 0:
            detail = result.stderr.strip() or f"exit code {result.returncode}"
            raise ParseError(f"failed to parse proto file {path}: {detail}")

        descriptor_set = descriptor_pb2.FileDescriptorSet()
        try:
            descriptor_set.ParseFromString(output.read_bytes())
        except (OSError, DecodeError) as e:
            raise ParseError(f"cannot read compiled descriptor for {path}", e) from e

    if not descriptor_set.file:
        raise ParseError(f"protoc produced no descriptor for {path}")
    return descriptor_set.file[-1]


class ProtobufParser(DomainParser):
    """Adapter for proto2/proto3 schema files."""

    def supported_extensions(self) -> Set[str]:
        return {".proto"}

    def format_name(self) -> str:
        return "Protocol Buffers"

    def validate(self, file_path: Union[str, Path]) -> None:
        path = self._check_path(file_path)
        descriptor = compile_descriptor(path)
        self._domain_messages(descriptor, path)

    def parse(self, file_path: Union[str, Path]) -> DomainModel:
        path = self._check_path(file_path)
        descriptor = compile_descriptor(path)
        messages = self._domain_messages(descriptor, path)

        entities = []
        relations: List[Relation] = []
        for message in messages:
            entity, entity_relations = self._convert_message(message, descriptor.package)
            entities.append(entity)
            relations.extend(entity_relations)

        go_package = descriptor.options.go_package
        domain_model = DomainModel(
            project_name=types.project_name(go_package, descriptor.package, path.stem),
            entities=entities,
            relations=relations,
            metadata={
                "source_format": "protobuf",
                "source_file": str(path),
                "package": descriptor.package,
                "go_package": go_package,
                "services": self._services(descriptor),
            },
        )
        logger.info(
            "Parsed %d entities and %d relations from %s",
            len(domain_model.entities),
            len(domain_model.relations),
            path,
        )
        return domain_model

    def _domain_messages(self, descriptor: FileDescriptorProto, path: Path) -> List[DescriptorProto]:
        if not descriptor.message_type:
            raise NoEntitiesError(f"nothing to generate: no messages found in {path}")

        messages = []
        for message in descriptor.message_type:
            if types.is_request_response(message.name):
                logger.debug("Skipping request/response message %s", message.name)
                continue
            messages.append(message)

        if not messages:
            raise NoEntitiesError(f"nothing to generate: only request/response messages found in {path}")
        return messages

    # Conversion

    def _convert_message(self, message: DescriptorProto, package: str) -> Tuple[Entity, List[Relation]]:
        entity = Entity(
            name=message.name,
            metadata={"proto_message": message.name, "proto_package": package},
        )
        map_entries = {
            nested.name: nested for nested in message.nested_type if nested.options.map_entry
        }
        relations = []

        for field in message.field:
            prop, relation = self._convert_field(message.name, field, map_entries)
            entity.add_property(prop)
            if relation is not None:
                relations.append(relation)

        logger.debug("Converted message %s with %d properties", message.name, len(entity.properties))
        return entity, relations

    def _convert_field(
        self,
        message_name: str,
        field: FieldDescriptorProto,
        map_entries: Dict[str, DescriptorProto],
    ) -> Tuple[Property, Optional[Relation]]:
        name = types.field_name(field.name)
        repeated = types.is_repeated(field)
        relation = None

        if field.type == FieldDescriptorProto.TYPE_MESSAGE:
            target = types.message_name(field.type_name)
            known = types.well_known_type(field.type_name)
            if repeated and target in map_entries:
                prop_type = model.MAP
            elif known is not None:
                prop_type = model.slice_of(known) if repeated else known
            elif types.is_request_response(target):
                prop_type = model.slice_of(model.ANY) if repeated else model.ANY
            else:
                prop_type = model.slice_of(target) if repeated else target
                relation = Relation(
                    from_entity=message_name,
                    to_entity=target,
                    type=RelationType.ONE_TO_MANY if repeated else RelationType.ONE_TO_ONE,
                    metadata={
                        "property_name": name,
                        "field_name": field.name,
                        "reference": field.type_name,
                    },
                )
        else:
            scalar = types.scalar_type(field)
            prop_type = model.slice_of(scalar) if repeated else scalar

        required = not types.is_repeated(field)
        tags = {"json": field.name, "protobuf": types.protobuf_tag(field)}
        if required:
            tags["validate"] = "required"

        prop = Property(
            name=name,
            type=prop_type,
            required=required,
            tags=tags,
            metadata={
                "proto_field": field.name,
                "proto_number": field.number,
                "proto_type": FieldDescriptorProto.Type.Name(field.type),
            },
        )
        return prop, relation

    def _services(self, descriptor: FileDescriptorProto) -> List[Dict[str, object]]:
        return [
            {
                "name": service.name,
                "methods": [
                    {
                        "name": method.name,
                        "input_type": types.message_name(method.input_type),
                        "output_type": types.message_name(method.output_type),
                    }
                    for method in service.method
                ],
            }
            for service in descriptor.service
        ]
