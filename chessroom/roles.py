from typing import Iterable, List, Optional

from loguru import logger

from chessroom.errors import RoomNotFoundError, SlotUnavailableError
from chessroom.models.user import Role, User


def slot_taken(room_users: Iterable[User], role: Role, sid: Optional[str] = None) -> bool:
    """Проверяет, занят ли цвет в комнате кем-то кроме sid."""
    return any(user.role is role and user.sid != sid for user in room_users)


class RoleAssigner:
    """Решает, может ли пользователь войти в комнату с запрошенной ролью.

    В строгом режиме охраняются оба цвета. Без него охраняется только
    чёрный цвет при входе в комнату: белым считается создатель комнаты.
    """

    def __init__(self, strict_slots: bool = True):
        self.strict_slots = strict_slots

    @property
    def guarded_roles(self) -> List[Role]:
        if self.strict_slots:
            return [Role.WHITE, Role.BLACK]
        return [Role.BLACK]

    def check_create(self, room_id: str, room_users: List[User], role: Role, sid: Optional[str] = None) -> Role:
        # Создание комнаты безусловно, пока цвет не занят кем-то, кто уже в ней сидит
        if self.strict_slots and role.is_player and slot_taken(room_users, role, sid):
            logger.info(f"Цвет {role.value} в комнате {room_id} уже занят")
            raise SlotUnavailableError(room_id, role.value)
        return role

    def check_enter(self, room_id: str, room_users: List[User], role: Role, sid: Optional[str] = None) -> Role:
        if not room_users:
            logger.warning(f"Комната {room_id} не существует")
            raise RoomNotFoundError(room_id)
        if role in self.guarded_roles and slot_taken(room_users, role, sid):
            logger.info(f"Цвет {role.value} в комнате {room_id} уже занят")
            raise SlotUnavailableError(room_id, role.value)
        return role
