"""
LV OCR — клиент сервиса распознавания банковских выписок.

Отправляет файл в OCR сервис в виде protobuf сообщения и возвращает
транзакции из первой распознанной выписки.

    - config: настройки (LV_* переменные окружения / .env)
    - messages: protobuf сообщения (Request, Document, Response, ...)
    - services: загрузка файла и HTTP клиент
    - main: CLI
"""

from lv_ocr.config import Settings
from lv_ocr.errors import OCRClientError
from lv_ocr.schemas import ExtractionResult, FileInfo
from lv_ocr.services.ocr_client import OcrClient

__all__ = [
    "Settings",
    "OcrClient",
    "OCRClientError",
    "ExtractionResult",
    "FileInfo",
]
