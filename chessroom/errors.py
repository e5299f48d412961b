"""Ошибки предметной области комнат."""


class ChessRoomError(Exception):
    """Базовая ошибка комнат и сессий."""


class RoomNotFoundError(ChessRoomError):
    """В комнате нет ни одного участника, войти в неё нельзя."""

    def __init__(self, room_id: str):
        super().__init__(f"room_id={room_id} does not exist")
        self.room_id = room_id


class SlotUnavailableError(ChessRoomError):
    """Запрошенный цвет уже занят другим игроком."""

    def __init__(self, room_id: str, role: str):
        super().__init__(f"slot {role} in room_id={room_id} is taken")
        self.room_id = room_id
        self.role = role


class UserNotFoundError(ChessRoomError):
    """Для соединения нет зарегистрированного пользователя."""

    def __init__(self, sid: str):
        super().__init__(f"sid={sid} not found")
        self.sid = sid
