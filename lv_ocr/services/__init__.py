"""
Сервисы клиента OCR.

Модули:
    - document_loader: чтение файла, определение MIME, сборка Request
    - ocr_client: обмен с OCR сервисом (health check + POST /ocr)
"""

from lv_ocr.services.document_loader import (
    build_request,
    detect_mime,
    load_document,
    read_file,
)
from lv_ocr.services.ocr_client import OcrClient

__all__ = [
    "OcrClient",
    "load_document",
    "build_request",
    "detect_mime",
    "read_file",
]
