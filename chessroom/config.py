"""Настройки сервера из переменных окружения CHESSROOM_*."""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Настройки сервера.

    strict_slots включён по умолчанию и расходится со старым протоколом: createRoom
    в занятый цвет отвечает turnToSpectator, а не создаёт второго игрока того же цвета.
    """

    model_config = SettingsConfigDict(env_prefix="CHESSROOM_")

    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1)
    cors_allowed_origins: str = "*"
    log_level: str = "INFO"

    admin_name: str = "Admin"
    welcome_text: str = "Welcome to Arc's Chess App!"

    strict_slots: bool = True
    evict_empty_rooms: bool = False

    def cors_origins(self):
        """Значение для socketio.Server(cors_allowed_origins=...)."""
        if self.cors_allowed_origins.strip() == "*":
            return "*"
        origins: List[str] = [item.strip() for item in self.cors_allowed_origins.split(",")]
        return [origin for origin in origins if origin]


def load_settings() -> Settings:
    return Settings()
