"""
Protobuf сообщения OCR сервиса.

Классы собираются при импорте из описания, повторяющего lv_ocr/ocr.proto,
через стандартный runtime protobuf:
    FileDescriptorProto -> DescriptorPool -> message_factory.GetMessageClass

Отдельный шаг protoc не нужен, бинарный формат совпадает
со сгенерированными *_pb2 модулями.

Сообщения:
    - Document: один файл (uuid, name, mime, file)
    - Request: запрос (uuid, documents)
    - Transaction: транзакция из выписки (для клиента — непрозрачные данные)
    - Statement: выписка (transactions)
    - Response: ответ (statements)
"""

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

PROTO_PACKAGE = "ocr"
PROTO_FILE = "lv_ocr/ocr.proto"

_Field = descriptor_pb2.FieldDescriptorProto

# (имя сообщения, [(имя поля, номер, тип, label, тип вложенного сообщения)])
_SCHEMA = [
    (
        "Document",
        [
            ("uuid", 1, _Field.TYPE_STRING, _Field.LABEL_OPTIONAL, None),
            ("name", 2, _Field.TYPE_STRING, _Field.LABEL_OPTIONAL, None),
            ("mime", 3, _Field.TYPE_STRING, _Field.LABEL_OPTIONAL, None),
            ("file", 4, _Field.TYPE_BYTES, _Field.LABEL_OPTIONAL, None),
        ],
    ),
    (
        "Request",
        [
            ("uuid", 1, _Field.TYPE_STRING, _Field.LABEL_OPTIONAL, None),
            ("documents", 2, _Field.TYPE_MESSAGE, _Field.LABEL_REPEATED, "Document"),
        ],
    ),
    (
        "Transaction",
        [
            ("date", 1, _Field.TYPE_STRING, _Field.LABEL_OPTIONAL, None),
            ("description", 2, _Field.TYPE_STRING, _Field.LABEL_OPTIONAL, None),
            ("amount", 3, _Field.TYPE_DOUBLE, _Field.LABEL_OPTIONAL, None),
            ("balance", 4, _Field.TYPE_DOUBLE, _Field.LABEL_OPTIONAL, None),
        ],
    ),
    (
        "Statement",
        [
            ("transactions", 1, _Field.TYPE_MESSAGE, _Field.LABEL_REPEATED, "Transaction"),
        ],
    ),
    (
        "Response",
        [
            ("statements", 1, _Field.TYPE_MESSAGE, _Field.LABEL_REPEATED, "Statement"),
        ],
    ),
]


def _to_json_name(name: str) -> str:
    """snake_case -> lowerCamelCase, как это делает protoc."""
    head, *tail = name.split("_")
    return head + "".join(part.capitalize() for part in tail)


def _build_file_descriptor() -> descriptor_pb2.FileDescriptorProto:
    """Собирает FileDescriptorProto по таблице _SCHEMA."""
    file_proto = descriptor_pb2.FileDescriptorProto(
        name=PROTO_FILE,
        package=PROTO_PACKAGE,
        syntax="proto3",
    )

    for message_name, fields in _SCHEMA:
        message_proto = file_proto.message_type.add(name=message_name)
        for field_name, number, field_type, label, type_name in fields:
            field_proto = message_proto.field.add(
                name=field_name,
                number=number,
                type=field_type,
                label=label,
                json_name=_to_json_name(field_name),
            )
            if type_name:
                field_proto.type_name = f".{PROTO_PACKAGE}.{type_name}"

    return file_proto


# Отдельный пул, чтобы не конфликтовать с чужими ocr.* в дефолтном пуле
_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(_build_file_descriptor().SerializeToString())


def _message_class(name: str):
    return message_factory.GetMessageClass(
        _pool.FindMessageTypeByName(f"{PROTO_PACKAGE}.{name}")
    )


Document = _message_class("Document")
Request = _message_class("Request")
Transaction = _message_class("Transaction")
Statement = _message_class("Statement")
Response = _message_class("Response")

__all__ = [
    "Document",
    "Request",
    "Transaction",
    "Statement",
    "Response",
]
