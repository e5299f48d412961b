from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class BoardStateSnapshot(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    room_id: str = Field(alias="roomId")
    board: Any = Field(None, alias="boardState")  # Непрозрачное состояние доски от клиента

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)
