from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    WHITE = "white"
    BLACK = "black"
    SPECTATOR = "spectator"

    @property
    def is_player(self) -> bool:
        return self is not Role.SPECTATOR


class GameInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    board_state: str = Field("start", alias="boardState")
    move_count: int = Field(1, alias="moveCount")


class User(BaseModel):
    sid: str                           # Socket.IO ID соединения
    name: str                          # Отображаемое имя, не валидируется
    room_id: str                       # Комната, назначается при входе
    role: Role                         # Цвет или зритель
    game: Optional[GameInfo] = None    # Есть только у игроков после старта партии
