"""
CLI клиента LV OCR.

Отправляет файл в OCR сервис и выводит транзакции первой выписки в JSON.
Если указан output_path — результат пишется в файл, иначе в stdout.
Логи идут в stderr, чтобы не смешиваться с JSON.

Токен берётся из LV_ACCESS_KEY (или .env), остальные настройки — LV_*.

Запуск:
    lv-ocr statement.pdf result.json

Или:
    python -m lv_ocr.main statement.pdf
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError

from lv_ocr.config import Settings
from lv_ocr.errors import ConfigurationError, OCRClientError, OutputWriteError
from lv_ocr.schemas import ExtractionResult
from lv_ocr.services.ocr_client import OcrClient

# Настройка логгера
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [LV-OCR] %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lv-ocr",
        description="Распознавание транзакций из банковской выписки через OCR сервис",
    )
    parser.add_argument("input_path", type=Path, help="Путь к файлу выписки")
    parser.add_argument(
        "output_path",
        type=Path,
        nargs="?",
        default=None,
        help="Куда записать JSON результат (по умолчанию stdout)",
    )
    parser.add_argument(
        "--service-url",
        default=None,
        help="URL сервиса (перекрывает LV_SERVICE_URL)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Таймаут запроса OCR в секундах (перекрывает LV_TIMEOUT_SECONDS)",
    )
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """
    Читает Settings из окружения и применяет аргументы командной строки.

    Raises:
        ConfigurationError: значения не прошли валидацию
    """
    overrides = {}
    if args.service_url:
        overrides["service_url"] = args.service_url
    if args.timeout is not None:
        overrides["timeout_seconds"] = args.timeout

    try:
        return Settings(**overrides)
    except ValidationError as e:
        fields = [".".join(str(part) for part in err["loc"]) for err in e.errors()]
        raise ConfigurationError(
            f"Некорректные настройки: {', '.join(fields)}",
            details={"errors": [err["msg"] for err in e.errors()]},
        ) from e


def write_result(result: ExtractionResult, output_path: Optional[Path]) -> None:
    """
    Пишет результат в файл или в stdout.

    Raises:
        OutputWriteError: файл не удалось записать
    """
    payload = result.model_dump_json(indent=2)

    if output_path is None:
        sys.stdout.write(payload + "\n")
        return

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(payload + "\n", encoding="utf-8")
    except OSError as e:
        raise OutputWriteError(
            f"Не удалось записать результат в {output_path}: {e}",
            details={"path": str(output_path)},
        ) from e

    logger.info(f"Результат записан: {output_path}")


def _report_error(error: OCRClientError) -> None:
    """Логирует ошибку в формате [error_code] message (+ детали)."""
    data = error.to_dict()
    logger.error(f"[{data['error']}] {data['message']}")
    if data["details"]:
        logger.error(f"Детали: {data['details']}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Точка входа CLI.

    Returns:
        int: код выхода (0 — успех, 1 — ошибка)
    """
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args)
        logger.info(f"OCR сервис: {settings.service_url}")

        result = asyncio.run(OcrClient(settings).extract(args.input_path))
        logger.info(
            f"Готово: {len(result.transactions)} транзакций "
            f"за {result.processing_time_ms}ms"
        )

        write_result(result, args.output_path)
    except OCRClientError as e:
        _report_error(e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
