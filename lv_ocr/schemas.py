"""
Схемы данных клиента LV OCR.

Protobuf сообщения живут в lv_ocr.messages; здесь — pydantic модели
для результата, который CLI отдаёт пользователю (JSON).
"""

from pydantic import BaseModel, Field


class FileInfo(BaseModel):
    """
    Информация о входном файле.

    Attributes:
        filename: имя файла (уходит в Document.name)
        mime: MIME тип (уходит в Document.mime)
        size_bytes: размер файла в байтах
    """

    filename: str
    mime: str
    size_bytes: int


class ExtractionResult(BaseModel):
    """
    Результат распознавания одного документа.

    Attributes:
        request_uuid: uuid запроса (Request.uuid)
        document_uuid: uuid документа (Document.uuid)
        file_info: информация о файле
        statements_count: сколько выписок вернул сервис
        transactions: транзакции первой выписки в виде словарей
        processing_time_ms: общее время операции в мс
    """

    request_uuid: str
    document_uuid: str
    file_info: FileInfo
    statements_count: int
    transactions: list[dict] = Field(default_factory=list)
    processing_time_ms: int = 0
