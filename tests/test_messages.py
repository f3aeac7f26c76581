"""
Тесты protobuf сообщений: совпадение с ocr.proto и совместимость формата.
"""

import re
from pathlib import Path

from google.protobuf.descriptor import FieldDescriptor

import lv_ocr
from lv_ocr.messages import Document, Request, Response, Statement, Transaction


def test_request_serialization_round_trip():
    request = Request(uuid="12345")
    request.documents.add(
        uuid="abcde",
        name="sample.pdf",
        mime="application/pdf",
        file=b"%PDF-1.4 \x00\xff",
    )

    decoded = Request.FromString(request.SerializeToString())

    assert decoded == request
    assert decoded.uuid == "12345"
    assert len(decoded.documents) == 1
    document = decoded.documents[0]
    assert document.uuid == "abcde"
    assert document.name == "sample.pdf"
    assert document.mime == "application/pdf"
    assert document.file == b"%PDF-1.4 \x00\xff"


def _parse_proto(text: str) -> dict[str, dict[str, tuple[str, str, int]]]:
    """
    Разбирает ocr.proto: {сообщение: {поле: (label, тип, номер)}}.

    Поддерживает только то, что есть в контракте: плоские message
    со скалярными и repeated полями.
    """
    text = re.sub(r"//[^\n]*", "", text)
    messages = {}
    for name, body in re.findall(r"message\s+(\w+)\s*\{(.*?)\}", text, re.S):
        messages[name] = {
            field: ("repeated" if repeated else "", field_type, int(number))
            for repeated, field_type, field, number in re.findall(
                r"(repeated\s+)?(\w+)\s+(\w+)\s*=\s*(\d+)\s*;", body
            )
        }
    return messages


def _descriptor_fields(message) -> dict[str, tuple[str, str, int]]:
    fields = {}
    for field in message.DESCRIPTOR.fields:
        if field.message_type is not None:
            field_type = field.message_type.name
        else:
            field_type = _SCALAR_TYPES[field.type]
        label = "repeated" if field.label == FieldDescriptor.LABEL_REPEATED else ""
        fields[field.name] = (label, field_type, field.number)
    return fields


_SCALAR_TYPES = {
    FieldDescriptor.TYPE_STRING: "string",
    FieldDescriptor.TYPE_BYTES: "bytes",
    FieldDescriptor.TYPE_DOUBLE: "double",
}


def test_messages_match_proto_file():
    proto_text = (Path(lv_ocr.__file__).parent / "ocr.proto").read_text(encoding="utf-8")
    contract = _parse_proto(proto_text)

    built = {
        message.DESCRIPTOR.name: _descriptor_fields(message)
        for message in (Document, Request, Transaction, Statement, Response)
    }

    assert set(contract) == {"Document", "Request", "Transaction", "Statement", "Response"}
    assert built == contract


def test_proto_parser_reads_field_lines():
    contract = _parse_proto(
        "// message Ignored { string x = 9; }\n"
        "message Statement {\n  repeated Transaction transactions = 1;\n}\n"
        "message Transaction { string date = 1; double amount = 3; }\n"
    )

    assert contract == {
        "Statement": {"transactions": ("repeated", "Transaction", 1)},
        "Transaction": {"date": ("", "string", 1), "amount": ("", "double", 3)},
    }


def test_document_wire_bytes():
    # Ручная раскладка: тег (номер << 3 | 2), длина, данные
    document = Document(uuid="u", name="n", mime="m", file=b"\x01")

    assert document.SerializeToString() == (
        b"\x0a\x01u" b"\x12\x01n" b"\x1a\x01m" b"\x22\x01\x01"
    )


def test_unknown_transaction_fields_are_preserved():
    # Transaction с полем 15 (varint 7), которого нет в схеме клиента
    raw_transaction = Transaction(description="x").SerializeToString() + b"\x78\x07"
    raw_statement = b"\x0a" + bytes([len(raw_transaction)]) + raw_transaction
    raw_response = b"\x0a" + bytes([len(raw_statement)]) + raw_statement

    response = Response.FromString(raw_response)
    transaction = response.statements[0].transactions[0]

    assert transaction.description == "x"
    assert transaction.SerializeToString().endswith(b"\x78\x07")
