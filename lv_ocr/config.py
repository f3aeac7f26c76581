"""
Конфигурация клиента LV OCR.

Значения читаются из .env файла (или переменных окружения) с префиксом LV_.
В отличие от сервиса, у клиента есть дефолты для всего, кроме токена:
без LV_ACCESS_KEY запрос уходит без заголовка Authorization.

Экземпляр Settings создаётся явно (в CLI или в тестах) и передаётся
в OcrClient — глобального объекта настроек нет.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Настройки клиента OCR сервиса.

    Читает переменные с префиксом LV_ из .env файла.
    """

    model_config = SettingsConfigDict(
        env_prefix="LV_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Игнорируем LV_MOCK_* переменные
    )

    # --- Авторизация ---
    # Передаётся в заголовке: Authorization: Bearer <token>
    access_key: Optional[str] = None

    # --- Сервис ---
    # Корень сервиса: GET на него — health check, POST на <url>ocr — распознавание
    service_url: str = "https://ocr-middleware-vupmcdtsia-as.a.run.app/"
    verify_ssl: bool = True

    # --- Таймауты ---
    timeout_seconds: float = Field(default=120.0, gt=0)
    health_timeout_seconds: float = Field(default=5.0, gt=0)
