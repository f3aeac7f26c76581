"""
Общие фикстуры тестов.

Сеть подменяется через httpx.MockTransport (сценарии по статусам)
или httpx.ASGITransport (mock сервис lv_ocr_mock целиком).
"""

from pathlib import Path
from typing import Callable

import httpx
import pytest

from lv_ocr.config import Settings
from lv_ocr.messages import Response

SERVICE_URL = "https://ocr.test/"
ACCESS_KEY = "test-key"

PDF_BYTES = b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n1 0 obj\n<<>>\nendobj\n%%EOF\n"


@pytest.fixture
def settings() -> Settings:
    """Настройки без чтения .env, с фиктивным сервисом и токеном."""
    return Settings(
        _env_file=None,
        service_url=SERVICE_URL,
        access_key=ACCESS_KEY,
        timeout_seconds=5.0,
        health_timeout_seconds=1.0,
    )


@pytest.fixture
def statement_pdf(tmp_path: Path) -> Path:
    path = tmp_path / "statement.pdf"
    path.write_bytes(PDF_BYTES)
    return path


def make_response(*statements: list[dict]) -> Response:
    """
    Собирает Response из списков транзакций.

    make_response([{"description": "a"}], []) -> две выписки,
    в первой одна транзакция, во второй ни одной.
    """
    response = Response()
    for transactions in statements:
        statement = response.statements.add()
        for transaction in transactions:
            statement.transactions.add(**transaction)
    return response


class RecordingService:
    """
    Сценарий сервиса для httpx.MockTransport.

    Запоминает все запросы; отвечает заданными статусами/телом.
    """

    def __init__(
        self,
        health_status: int = 200,
        ocr_status: int = 200,
        ocr_body: bytes = b"",
    ) -> None:
        self.health_status = health_status
        self.ocr_status = ocr_status
        self.ocr_body = ocr_body
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.method == "GET" and request.url.path == "/":
            return httpx.Response(self.health_status, json={"status": "ok"})

        if request.method == "POST" and request.url.path == "/ocr":
            return httpx.Response(
                self.ocr_status,
                content=self.ocr_body,
                headers={"Content-Type": "application/octet-stream"},
            )

        return httpx.Response(404, json={"detail": "not found"})

    @property
    def ocr_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == "/ocr"]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def service_factory() -> Callable[..., RecordingService]:
    return RecordingService
