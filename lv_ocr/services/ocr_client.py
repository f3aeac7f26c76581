"""
Клиент OCR сервиса.

Выполняет один обмен с сервисом:
    чтение файла -> health check -> Request -> POST <url>ocr -> Response
    -> транзакции первой выписки

Протокол:
    - GET  <service_url>     — health check, успех = 200
    - POST <service_url>ocr  — тело: Request (protobuf), ответ: Response (protobuf)

Повторов нет: любая ошибка прерывает операцию (см. lv_ocr.errors).
"""

import logging
import time
from pathlib import Path
from typing import Optional, Union

import httpx
from google.protobuf.json_format import MessageToDict
from google.protobuf.message import DecodeError

from lv_ocr.config import Settings
from lv_ocr.errors import (
    AuthenticationError,
    MissingDataError,
    NetworkError,
    ProtocolDecodeError,
    ServiceUnavailableError,
)
from lv_ocr.messages import Request, Response, Transaction
from lv_ocr.schemas import ExtractionResult, FileInfo
from lv_ocr.services.document_loader import build_request, load_document

logger = logging.getLogger(__name__)

OCTET_STREAM = "application/octet-stream"

# Сколько байт тела ответа показывать в сообщении об ошибке
_BODY_PREVIEW_BYTES = 200


class OcrClient:
    """
    Асинхронный клиент OCR сервиса поверх httpx.

    Настройки передаются явно; transport позволяет подменить сеть
    в тестах (httpx.MockTransport, httpx.ASGITransport).
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._settings.service_url,
            timeout=httpx.Timeout(self._settings.timeout_seconds),
            verify=self._settings.verify_ssl,
            follow_redirects=True,
            transport=self._transport,
        )

    def _headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": OCTET_STREAM,
            "Accept": OCTET_STREAM,
        }
        if self._settings.access_key:
            headers["Authorization"] = f"Bearer {self._settings.access_key}"
        else:
            logger.warning("LV_ACCESS_KEY не задан, запрос уйдёт без авторизации")
        return headers

    async def check_health(self) -> None:
        """
        Проверяет доступность сервиса (GET на корень).

        Raises:
            ServiceUnavailableError: статус не 200
            NetworkError: сервис не ответил
        """
        async with self._client() as client:
            await self._check_health(client)

    async def send_request(self, request: Request) -> Response:
        """
        Отправляет готовый Request и разбирает Response.

        Args:
            request: protobuf запрос

        Returns:
            Response: разобранный ответ сервиса

        Raises:
            AuthenticationError: 401/403
            NetworkError: транспортная ошибка или статус не 200
            ProtocolDecodeError: тело ответа не является Response
        """
        async with self._client() as client:
            return await self._send_request(client, request)

    async def extract_transactions(
        self,
        file_path: Union[str, Path],
        *,
        request_uuid: Optional[str] = None,
        document_uuid: Optional[str] = None,
    ) -> list[Transaction]:
        """
        Распознаёт файл и возвращает транзакции первой выписки.

        Args:
            file_path: путь к файлу
            request_uuid: uuid запроса (по умолчанию uuid4)
            document_uuid: uuid документа (по умолчанию uuid4)

        Returns:
            list[Transaction]: транзакции statements[0]
        """
        _, _, response = await self._exchange(
            file_path,
            request_uuid=request_uuid,
            document_uuid=document_uuid,
        )
        return list(_first_statement(response).transactions)

    async def extract(
        self,
        file_path: Union[str, Path],
        *,
        request_uuid: Optional[str] = None,
        document_uuid: Optional[str] = None,
    ) -> ExtractionResult:
        """
        То же, что extract_transactions, но с метаданными запроса.

        Транзакции преобразуются в словари (имена полей как в .proto).

        Returns:
            ExtractionResult: результат для вывода в JSON
        """
        start_time = time.time()

        request, file_info, response = await self._exchange(
            file_path,
            request_uuid=request_uuid,
            document_uuid=document_uuid,
        )
        statement = _first_statement(response)

        transactions = [
            MessageToDict(
                transaction,
                preserving_proto_field_name=True,
                always_print_fields_with_no_presence=True,
            )
            for transaction in statement.transactions
        ]
        processing_time_ms = int((time.time() - start_time) * 1000)

        return ExtractionResult(
            request_uuid=request.uuid,
            document_uuid=request.documents[0].uuid,
            file_info=file_info,
            statements_count=len(response.statements),
            transactions=transactions,
            processing_time_ms=processing_time_ms,
        )

    async def _exchange(
        self,
        file_path: Union[str, Path],
        *,
        request_uuid: Optional[str],
        document_uuid: Optional[str],
    ) -> tuple[Request, FileInfo, Response]:
        """
        Полный обмен: файл -> health check -> POST -> Response.

        Файл читается до любых сетевых вызовов, поэтому ошибка
        отсутствующего файла не трогает сервис.
        """
        document, file_info = load_document(file_path, document_uuid=document_uuid)
        request = build_request([document], request_uuid=request_uuid)

        async with self._client() as client:
            await self._check_health(client)
            response = await self._send_request(client, request)

        return request, file_info, response

    async def _check_health(self, client: httpx.AsyncClient) -> None:
        try:
            response = await client.get(
                "/",
                timeout=self._settings.health_timeout_seconds,
            )
        except httpx.TransportError as e:
            logger.error(f"Health check: сервис недоступен: {e!r}")
            raise NetworkError(
                f"Сервис недоступен по адресу {self._settings.service_url}: {e}",
                details={"url": self._settings.service_url},
            ) from e

        if response.status_code != 200:
            logger.error(f"Health check не пройден: {response.status_code}")
            raise ServiceUnavailableError(
                f"Health check вернул {response.status_code}",
                details={
                    "url": self._settings.service_url,
                    "status_code": response.status_code,
                },
            )

        logger.info("Health check пройден")

    async def _send_request(
        self,
        client: httpx.AsyncClient,
        request: Request,
    ) -> Response:
        payload = request.SerializeToString()
        logger.info(
            f"Отправка запроса {request.uuid}: "
            f"{len(request.documents)} док., {len(payload)} байт"
        )

        try:
            http_response = await client.post(
                "/ocr",
                content=payload,
                headers=self._headers(),
            )
        except httpx.TimeoutException as e:
            logger.error("Таймаут ожидания OCR сервиса")
            raise NetworkError(
                f"OCR сервис не ответил за {self._settings.timeout_seconds} секунд",
                details={"request_uuid": request.uuid},
            ) from e
        except httpx.TransportError as e:
            logger.error(f"Ошибка соединения с OCR сервисом: {e!r}")
            raise NetworkError(
                f"Ошибка соединения с OCR сервисом: {e}",
                details={"request_uuid": request.uuid},
            ) from e

        _raise_for_status(http_response, request.uuid)

        try:
            response = Response.FromString(http_response.content)
        except DecodeError as e:
            logger.error(f"Не удалось разобрать ответ: {len(http_response.content)} байт")
            raise ProtocolDecodeError(
                f"Ответ сервиса не является валидным Response: {e}",
                details={
                    "request_uuid": request.uuid,
                    "size_bytes": len(http_response.content),
                },
            ) from e

        logger.info(
            f"Ответ получен: {len(http_response.content)} байт, "
            f"выписок: {len(response.statements)}"
        )
        return response


def _raise_for_status(http_response: httpx.Response, request_uuid: str) -> None:
    """Переводит неуспешный HTTP статус в ошибку клиента."""
    status_code = http_response.status_code
    if status_code == 200:
        return

    details = {
        "request_uuid": request_uuid,
        "status_code": status_code,
        "body": http_response.content[:_BODY_PREVIEW_BYTES].decode("utf-8", "replace"),
    }

    if status_code in (401, 403):
        logger.error(f"Сервис отклонил токен: {status_code}")
        raise AuthenticationError(
            f"Сервис отклонил токен доступа: {status_code}",
            details=details,
        )

    logger.error(f"OCR сервис вернул ошибку: {status_code}")
    raise NetworkError(
        f"OCR сервис вернул ошибку: {status_code}",
        details=details,
    )


def _first_statement(response: Response):
    """Возвращает statements[0] или бросает MissingDataError."""
    if not response.statements:
        raise MissingDataError("Ответ сервиса не содержит ни одной выписки")
    return response.statements[0]
