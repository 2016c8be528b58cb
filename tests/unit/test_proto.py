from pathlib import Path

import pytest
from google.protobuf import descriptor_pb2
from grpc_tools import protoc

from translation_service.proto import FILE_DESCRIPTOR, SERVICE_NAME, TranslateResponse

PACKAGE_ROOT = Path(__file__).resolve().parents[2]
PROTO_FILE = "translation_service/translator.proto"


def normalize(file_proto: descriptor_pb2.FileDescriptorProto) -> dict:
    """Reduce a file descriptor to the parts that define the wire schema."""

    def fields(message: descriptor_pb2.DescriptorProto) -> list[tuple]:
        return [(f.name, f.number, f.type, f.label, f.type_name) for f in message.field]

    def message(msg: descriptor_pb2.DescriptorProto) -> dict:
        return {
            "name": msg.name,
            "fields": fields(msg),
            "map_entry": msg.options.map_entry,
            "nested": [message(n) for n in msg.nested_type],
        }

    return {
        "package": file_proto.package,
        "syntax": file_proto.syntax,
        "messages": [message(m) for m in file_proto.message_type],
        "services": [
            (s.name, [(m.name, m.input_type, m.output_type) for m in s.method])
            for s in file_proto.service
        ],
    }


@pytest.fixture
def compiled_proto(tmp_path: Path) -> descriptor_pb2.FileDescriptorProto:
    out = tmp_path / "translator.desc"
    rc = protoc.main(
        [
            "grpc_tools.protoc",
            f"-I{PACKAGE_ROOT}",
            f"--descriptor_set_out={out}",
            str(PACKAGE_ROOT / PROTO_FILE),
        ]
    )
    assert rc == 0
    file_set = descriptor_pb2.FileDescriptorSet.FromString(out.read_bytes())
    return file_set.file[0]


def test_descriptor_matches_proto_file(compiled_proto: descriptor_pb2.FileDescriptorProto) -> None:
    built = descriptor_pb2.FileDescriptorProto()
    FILE_DESCRIPTOR.CopyToProto(built)

    assert compiled_proto.name == built.name == PROTO_FILE
    assert normalize(built) == normalize(compiled_proto)


def test_service_and_map_field() -> None:
    assert SERVICE_NAME in {s.full_name for s in FILE_DESCRIPTOR.services_by_name.values()}

    resp = TranslateResponse(translations={"en": "hello"})
    resp.translations["ru"] = "привет"
    assert TranslateResponse.FromString(resp.SerializeToString()).translations == {
        "en": "hello",
        "ru": "привет",
    }
