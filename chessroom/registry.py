from typing import Dict, List, Optional

from loguru import logger

from chessroom.errors import UserNotFoundError
from chessroom.models.user import User


class SessionRegistry:
    """Хранилище пользователей по SID соединения.

    Комнаты отдельно не хранятся: комната существует, пока в ней есть
    хотя бы один пользователь, и вычисляется по записям реестра.
    """

    def __init__(self):
        self._users: Dict[str, User] = {}

    def __len__(self) -> int:
        return len(self._users)

    def __contains__(self, sid: str) -> bool:
        return sid in self._users

    def add_or_replace(self, user: User) -> User:
        """Добавляет пользователя, заменяя запись с тем же SID."""
        # Повторная вставка должна переехать в конец, как при новом подключении
        self._users.pop(user.sid, None)
        self._users[user.sid] = user
        logger.debug(f"Пользователь добавлен: {user.name} (SID={user.sid}, комната={user.room_id})")
        return user

    def remove(self, sid: str) -> Optional[User]:
        """Удаляет пользователя из хранилища, если он есть."""
        user = self._users.pop(sid, None)
        if user:
            logger.debug(f"Пользователь удалён: {user.name} (SID={sid})")
        return user

    def find(self, sid: str) -> Optional[User]:
        """Возвращает пользователя по SID или None."""
        return self._users.get(sid)

    def get(self, sid: str) -> User:
        user = self._users.get(sid)
        if user is None:
            raise UserNotFoundError(sid)
        return user

    def list_in_room(self, room_id: Optional[str]) -> List[User]:
        if room_id is None:
            return []
        return [user for user in self._users.values() if user.room_id == room_id]

    def room_exists(self, room_id: str) -> bool:
        return any(user.room_id == room_id for user in self._users.values())
