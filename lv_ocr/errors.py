"""
Иерархия ошибок клиента LV OCR.

Каждая ошибка прерывает операцию целиком: повторов и частичных
результатов нет. Все ошибки наследуются от OCRClientError и несут
машиночитаемый error_code (для логов и кода выхода CLI).
"""

from typing import Any, Optional


class OCRClientError(Exception):
    """
    Базовая ошибка клиента.

    Attributes:
        message: человекочитаемое сообщение
        error_code: код ошибки (snake_case)
        details: дополнительный контекст (статус, путь к файлу и т.д.)
    """

    error_code = "ocr_client_error"

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ServiceUnavailableError(OCRClientError):
    """Health check сервиса вернул не 200."""

    error_code = "service_unavailable"


class DocumentNotFoundError(OCRClientError):
    """Входной файл не существует."""

    error_code = "file_not_found"


class DocumentReadError(OCRClientError):
    """Входной файл существует, но прочитать его не удалось."""

    error_code = "file_read_error"


class NetworkError(OCRClientError):
    """Транспортная ошибка или неуспешный HTTP статус запроса OCR."""

    error_code = "network_error"


class AuthenticationError(NetworkError):
    """Сервис отклонил bearer токен (HTTP 401/403)."""

    error_code = "authentication_error"


class ProtocolDecodeError(OCRClientError):
    """Тело ответа не разбирается как Response."""

    error_code = "protocol_decode_error"


class MissingDataError(OCRClientError):
    """Ответ разобран, но в нём нет ни одной выписки."""

    error_code = "missing_data"


class ConfigurationError(OCRClientError):
    """Некорректные настройки (LV_* переменные или аргументы CLI)."""

    error_code = "invalid_config"


class OutputWriteError(OCRClientError):
    """Не удалось записать результат в output_path."""

    error_code = "output_write_error"
