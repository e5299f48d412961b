from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from chessroom.models.user import Role


class InboundEvent(str, Enum):
    """События, которые сервер принимает от клиента."""

    CREATE_ROOM = "createRoom"
    ENTER_ROOM = "enterRoom"
    MESSAGE = "message"
    IN_CHECK = "inCheck"
    IS_CHECK_MATE = "isCheckMate"
    IS_DRAW = "isDraw"
    IS_STALE_MATE = "isStaleMate"
    IS_THREEFOLD_REPETITION = "isThreefoldRepetition"
    TURN_OVER = "turnOver"
    BOARD_STATE = "boardState"
    GET_BOARD_STATE = "getBoardState"
    DISCONNECT = "disconnect"


class OutboundEvent(str, Enum):
    MESSAGE = "message"
    TURN_TO_SPECTATOR = "turnToSpectator"
    GET_BOARD_STATE = "getBoardState"
    GAME_START = "gameStart"
    IN_CHECK = "inCheck"
    IS_CHECK_MATE = "isCheckMate"
    IS_DRAW = "isDraw"
    IS_STALE_MATE = "isStaleMate"
    IS_THREEFOLD_REPETITION = "isThreefoldRepetition"
    TURN_OVER = "turnOver"


# Сигналы конца партии: клиент вычисляет их сам, сервер только пересылает в комнату
GAME_END_EVENTS = (
    InboundEvent.IS_CHECK_MATE,
    InboundEvent.IS_DRAW,
    InboundEvent.IS_STALE_MATE,
    InboundEvent.IS_THREEFOLD_REPETITION,
)


class JoinRequest(BaseModel):
    """Полезная нагрузка createRoom и enterRoom."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str = ""  # Имя не проверяется, пустое тоже годится
    room_id: str = Field(validation_alias=AliasChoices("roomId", "room_id"))
    # Старый клиент присылает роль в поле type
    role: Role = Field(validation_alias=AliasChoices("type", "role"))

    @field_validator("name", mode="before")
    @classmethod
    def _name_as_text(cls, value):
        return "" if value is None else str(value)


class BoardStateUpdate(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    room_id: str = Field(validation_alias=AliasChoices("roomId", "room_id"))
    board_state: Any = Field(None, validation_alias=AliasChoices("boardState", "board_state"))
