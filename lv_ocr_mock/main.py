"""
Mock OCR сервис — FastAPI приложение с протоколом настоящего сервиса.

Эндпоинты:
    GET  /    — health check
    POST /ocr — тело: Request (protobuf), ответ: Response (protobuf)

На каждый документ возвращается одна выписка с одной транзакцией:
description = имя документа, amount = размер файла в байтах.

Запуск:
    python -m lv_ocr_mock.main

Или:
    uvicorn lv_ocr_mock.main:app --port 8080
"""

import logging
from datetime import date
from typing import Optional

from fastapi import FastAPI, HTTPException, Request as HTTPRequest
from fastapi.responses import Response as HTTPResponse
from google.protobuf.message import DecodeError

from lv_ocr.messages import Request, Response
from lv_ocr_mock.config import settings

OCTET_STREAM = "application/octet-stream"

# Настройка логгера
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [LV-OCR-Mock] %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)

# FastAPI приложение
app = FastAPI(
    title="LV OCR Mock",
    description="Тестовый OCR сервис с protobuf протоколом",
    version="1.0.0",
)


@app.get("/")
async def health_check() -> dict:
    """
    Проверка работоспособности.

    Returns:
        dict: статус сервиса
    """
    return {
        "status": "ok",
        "service": "lv-ocr-mock",
        "auth_required": bool(settings.access_key),
    }


@app.post("/ocr")
async def perform_ocr(http_request: HTTPRequest) -> HTTPResponse:
    """
    Принимает Request, возвращает Response.

    Raises:
        HTTPException: 401 (токен), 415 (Content-Type), 400 (не protobuf)
    """
    _check_auth(http_request.headers.get("authorization"))

    content_type = http_request.headers.get("content-type", "")
    if content_type.split(";")[0].strip() != OCTET_STREAM:
        raise HTTPException(
            status_code=415,
            detail=f"Ожидается {OCTET_STREAM}, получен: {content_type or 'ничего'}",
        )

    body = await http_request.body()
    try:
        request = Request.FromString(body)
    except DecodeError as e:
        logger.warning(f"Некорректное тело запроса: {len(body)} байт")
        raise HTTPException(
            status_code=400,
            detail=f"Тело запроса не является Request: {e}",
        )

    logger.info(f"Запрос {request.uuid}: документов {len(request.documents)}")

    response = _build_response(request)
    return HTTPResponse(
        content=response.SerializeToString(),
        media_type=OCTET_STREAM,
    )


def _check_auth(authorization: Optional[str]) -> None:
    """Сверяет bearer токен, если access_key задан."""
    if not settings.access_key:
        return

    if authorization != f"Bearer {settings.access_key}":
        logger.warning("Отклонён запрос с неверным токеном")
        raise HTTPException(status_code=401, detail="Неверный токен доступа")


def _build_response(request: Request) -> Response:
    """По одной выписке с одной транзакцией на каждый документ."""
    response = Response()
    today = date.today().isoformat()

    for document in request.documents:
        statement = response.statements.add()
        statement.transactions.add(
            date=today,
            description=document.name,
            amount=float(len(document.file)),
            balance=0.0,
        )

    return response


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Запуск LV OCR Mock на порту {settings.port}")

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=settings.port,
        log_level="info",
    )
