"""
Загрузка входного файла и сборка protobuf запроса.

Файл читается целиком в память (ограничения по размеру нет).
Имя и MIME тип документа берутся из самого файла, uuid генерируются,
если их не передали явно.
"""

import logging
import mimetypes
import uuid
from pathlib import Path
from typing import Iterable, Optional, Union

from lv_ocr.errors import DocumentNotFoundError, DocumentReadError
from lv_ocr.messages import Document, Request
from lv_ocr.schemas import FileInfo

logger = logging.getLogger(__name__)

DEFAULT_MIME = "application/octet-stream"

# Сигнатуры для файлов без расширения (или с незнакомым расширением)
_MAGIC_SIGNATURES = [
    (b"%PDF", "application/pdf"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"II*\x00", "image/tiff"),
    (b"MM\x00*", "image/tiff"),
]


def read_file(path: Union[str, Path]) -> bytes:
    """
    Читает файл целиком.

    Args:
        path: путь к файлу

    Returns:
        bytes: содержимое файла

    Raises:
        DocumentNotFoundError: файла нет
        DocumentReadError: файл есть, но не читается (каталог, права и т.п.)
    """
    path = Path(path)

    try:
        return path.read_bytes()
    except FileNotFoundError as e:
        raise DocumentNotFoundError(
            f"Файл не найден: {path}",
            details={"path": str(path)},
        ) from e
    except OSError as e:
        raise DocumentReadError(
            f"Не удалось прочитать файл {path}: {e}",
            details={"path": str(path)},
        ) from e


def detect_mime(filename: str, content: bytes) -> str:
    """
    Определяет MIME тип документа.

    Порядок:
        1. По расширению (mimetypes)
        2. По сигнатуре содержимого (%PDF, PNG, JPEG, TIFF)
        3. application/octet-stream

    Args:
        filename: имя файла
        content: содержимое файла

    Returns:
        str: MIME тип
    """
    mime, _ = mimetypes.guess_type(filename)
    if mime:
        return mime

    for signature, signature_mime in _MAGIC_SIGNATURES:
        if content.startswith(signature):
            return signature_mime

    return DEFAULT_MIME


def load_document(
    path: Union[str, Path],
    *,
    document_uuid: Optional[str] = None,
    name: Optional[str] = None,
    mime: Optional[str] = None,
) -> tuple[Document, FileInfo]:
    """
    Читает файл и собирает из него Document.

    Args:
        path: путь к файлу
        document_uuid: uuid документа (по умолчанию uuid4)
        name: имя документа (по умолчанию имя файла)
        mime: MIME тип (по умолчанию определяется автоматически)

    Returns:
        tuple: (Document, FileInfo)
    """
    path = Path(path)
    content = read_file(path)

    name = name or path.name
    mime = mime or detect_mime(name, content)

    document = Document(
        uuid=document_uuid or str(uuid.uuid4()),
        name=name,
        mime=mime,
        file=content,
    )
    file_info = FileInfo(filename=name, mime=mime, size_bytes=len(content))

    logger.info(f"Файл прочитан: {name}, {mime}, {len(content)} байт")

    return document, file_info


def build_request(
    documents: Iterable[Document],
    *,
    request_uuid: Optional[str] = None,
) -> Request:
    """Оборачивает документы в Request с uuid запроса."""
    request = Request(uuid=request_uuid or str(uuid.uuid4()))
    request.documents.extend(documents)
    return request
