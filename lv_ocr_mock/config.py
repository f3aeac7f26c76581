"""
Конфигурация mock OCR сервиса.

Читает переменные с префиксом LV_MOCK_ из .env файла.
Если access_key не задан — авторизация не проверяется.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Настройки mock OCR сервиса."""

    model_config = SettingsConfigDict(
        env_prefix="LV_MOCK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Сервер ---
    port: int = 8080

    # --- Авторизация ---
    # Ожидаемый токен: Authorization: Bearer <token>
    access_key: Optional[str] = None


# Глобальный экземпляр настроек
settings = Settings()
