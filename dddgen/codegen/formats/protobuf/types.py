"""
Protocol Buffer field to canonical type mapping.
"""

from typing import Optional

from google.protobuf.descriptor_pb2 import FieldDescriptorProto

from ...core import model
from ...core.naming import segments_to_pascal

REQUEST_RESPONSE_SUFFIXES = ("Request", "Response", "Req", "Resp")

TIMESTAMP_TYPE = ".google.protobuf.Timestamp"
WELL_KNOWN_PREFIX = ".google.protobuf."

WELL_KNOWN_TYPES = {
    TIMESTAMP_TYPE: model.TIME,
    ".google.protobuf.Struct": model.MAP,
}

SCALAR_TYPES = {
    FieldDescriptorProto.TYPE_DOUBLE: model.FLOAT64,
    FieldDescriptorProto.TYPE_FLOAT: model.FLOAT32,
    FieldDescriptorProto.TYPE_INT64: model.INT64,
    FieldDescriptorProto.TYPE_SINT64: model.INT64,
    FieldDescriptorProto.TYPE_SFIXED64: model.INT64,
    FieldDescriptorProto.TYPE_UINT64: model.UINT64,
    FieldDescriptorProto.TYPE_FIXED64: model.UINT64,
    FieldDescriptorProto.TYPE_INT32: model.INT32,
    FieldDescriptorProto.TYPE_SINT32: model.INT32,
    FieldDescriptorProto.TYPE_SFIXED32: model.INT32,
    FieldDescriptorProto.TYPE_UINT32: model.UINT32,
    FieldDescriptorProto.TYPE_FIXED32: model.UINT32,
    FieldDescriptorProto.TYPE_BOOL: model.BOOL,
    FieldDescriptorProto.TYPE_STRING: model.STRING,
    FieldDescriptorProto.TYPE_BYTES: model.BYTES,
    FieldDescriptorProto.TYPE_ENUM: model.STRING,
}

# Wire encodings as spelled in protoc-gen-go struct tags
WIRE_TYPES = {
    FieldDescriptorProto.TYPE_DOUBLE: "fixed64",
    FieldDescriptorProto.TYPE_FLOAT: "fixed32",
    FieldDescriptorProto.TYPE_INT64: "varint",
    FieldDescriptorProto.TYPE_UINT64: "varint",
    FieldDescriptorProto.TYPE_INT32: "varint",
    FieldDescriptorProto.TYPE_UINT32: "varint",
    FieldDescriptorProto.TYPE_BOOL: "varint",
    FieldDescriptorProto.TYPE_ENUM: "varint",
    FieldDescriptorProto.TYPE_SINT32: "zigzag32",
    FieldDescriptorProto.TYPE_SINT64: "zigzag64",
    FieldDescriptorProto.TYPE_FIXED32: "fixed32",
    FieldDescriptorProto.TYPE_SFIXED32: "fixed32",
    FieldDescriptorProto.TYPE_FIXED64: "fixed64",
    FieldDescriptorProto.TYPE_SFIXED64: "fixed64",
    FieldDescriptorProto.TYPE_STRING: "bytes",
    FieldDescriptorProto.TYPE_BYTES: "bytes",
    FieldDescriptorProto.TYPE_MESSAGE: "bytes",
    FieldDescriptorProto.TYPE_GROUP: "group",
}


def is_request_response(message_name: str) -> bool:
    """
    Name-based RPC envelope heuristic (case-sensitive suffix match).

    Known to misfire on domain names such as ``AuditRequest``.
    """
    return message_name.endswith(REQUEST_RESPONSE_SUFFIXES)


def message_name(type_name: str) -> str:
    """Short name of a fully-qualified type (``.pkg.User`` -> ``User``)."""
    return type_name.rsplit(".", 1)[-1]


def field_name(proto_name: str) -> str:
    """snake_case field name to PascalCase (``user_id`` -> ``UserId``)."""
    return segments_to_pascal(proto_name, "_")


def is_repeated(field: FieldDescriptorProto) -> bool:
    return field.label == FieldDescriptorProto.LABEL_REPEATED


def well_known_type(type_name: str) -> Optional[str]:
    """Canonical type for a google.protobuf message, or None for user messages."""
    if type_name in WELL_KNOWN_TYPES:
        return WELL_KNOWN_TYPES[type_name]
    if type_name.startswith(WELL_KNOWN_PREFIX):
        return model.ANY
    return None


def scalar_type(field: FieldDescriptorProto) -> str:
    return SCALAR_TYPES.get(field.type, model.ANY)


def protobuf_tag(field: FieldDescriptorProto) -> str:
    """``<wire>,<number>,<opt|rep>,name=<field>`` struct tag value."""
    wire = WIRE_TYPES.get(field.type, "bytes")
    cardinality = "rep" if is_repeated(field) else "opt"
    return f"{wire},{field.number},{cardinality},name={field.name}"


def project_name(go_package: str, package: str, stem: str) -> str:
    """
    Project name from file options.

    Last path segment of ``go_package`` (ignoring a ``;alias`` suffix),
    else the proto package with dots as hyphens, else the file stem.
    """
    if go_package:
        path = go_package.split(";", 1)[0].rstrip("/")
        if path:
            return path.rsplit("/", 1)[-1]
    if package:
        return package.replace(".", "-")
    return stem
