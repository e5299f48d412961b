from datetime import datetime

from pydantic import BaseModel


class Message(BaseModel):
    name: str  # Автор сообщения
    text: str  # Текст сообщения
    time: str  # Время отправки, ЧЧ:ММ:СС в локали сервера


def build_message(name: str, text: str) -> dict:
    """Собирает полезную нагрузку события message."""
    return Message(name=name, text=text, time=datetime.now().strftime("%X")).model_dump()
