"""
Protobuf messages for the translator.TranslatorService gRPC API.

The descriptors mirror translator.proto and are registered in the default
descriptor pool so that server reflection can serve them.
"""

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

PACKAGE = "translator"
SERVICE_NAME = f"{PACKAGE}.TranslatorService"
TRANSLATE_METHOD = "Translate"

_FieldProto = descriptor_pb2.FieldDescriptorProto


def _string_field(name: str, number: int, repeated: bool = False) -> _FieldProto:
    return _FieldProto(
        name=name,
        number=number,
        type=_FieldProto.TYPE_STRING,
        label=_FieldProto.LABEL_REPEATED if repeated else _FieldProto.LABEL_OPTIONAL,
    )


def _build_file() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="translation_service/translator.proto", package=PACKAGE, syntax="proto3"
    )

    request = file_proto.message_type.add(name="TranslateRequest")
    request.field.extend(
        [
            _string_field("text", 1),
            _string_field("from_lang", 2),
            _string_field("langs", 3, repeated=True),
        ]
    )

    response = file_proto.message_type.add(name="TranslateResponse")
    entry = response.nested_type.add(name="TranslationsEntry")
    entry.options.map_entry = True
    entry.field.extend([_string_field("key", 1), _string_field("value", 2)])
    response.field.add(
        name="translations",
        number=1,
        type=_FieldProto.TYPE_MESSAGE,
        label=_FieldProto.LABEL_REPEATED,
        type_name=f".{PACKAGE}.TranslateResponse.TranslationsEntry",
    )

    service = file_proto.service.add(name="TranslatorService")
    service.method.add(
        name=TRANSLATE_METHOD,
        input_type=f".{PACKAGE}.TranslateRequest",
        output_type=f".{PACKAGE}.TranslateResponse",
    )
    return file_proto


FILE_DESCRIPTOR = descriptor_pool.Default().AddSerializedFile(_build_file().SerializeToString())

TranslateRequest = message_factory.GetMessageClass(
    FILE_DESCRIPTOR.message_types_by_name["TranslateRequest"]
)
TranslateResponse = message_factory.GetMessageClass(
    FILE_DESCRIPTOR.message_types_by_name["TranslateResponse"]
)
