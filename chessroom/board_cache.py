from typing import Any, Dict, Optional

from loguru import logger

from chessroom.models.board import BoardStateSnapshot


class BoardStateCache:
    """Последнее известное состояние доски для каждой комнаты."""

    def __init__(self):
        self._snapshots: Dict[str, BoardStateSnapshot] = {}

    def __len__(self) -> int:
        return len(self._snapshots)

    def put(self, room_id: str, board: Any) -> BoardStateSnapshot:
        snapshot = BoardStateSnapshot(room_id=room_id, board=board)
        self._snapshots[room_id] = snapshot
        logger.debug(f"Состояние доски обновлено для комнаты {room_id}")
        return snapshot

    def get(self, room_id: Optional[str]) -> Optional[BoardStateSnapshot]:
        if room_id is None:
            return None
        return self._snapshots.get(room_id)

    def discard(self, room_id: str) -> None:
        if self._snapshots.pop(room_id, None) is not None:
            logger.debug(f"Состояние доски комнаты {room_id} удалено")
