"""
Mock OCR сервис для локальной разработки и тестов.

Повторяет HTTP поверхность настоящего сервиса (GET /, POST /ocr)
и отвечает синтетическими выписками в том же protobuf формате.
"""

from lv_ocr_mock.config import settings

__all__ = ["settings"]
