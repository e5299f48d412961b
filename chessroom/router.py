from typing import Any, Optional, Protocol

from chessroom.models.events import OutboundEvent
from chessroom.models.user import Role, User
from chessroom.registry import SessionRegistry


class Transport(Protocol):
    """Часть socketio.Server, которой пользуется ядро."""

    def emit(self, event, data=None, to=None, room=None, skip_sid=None, namespace=None, callback=None, **kwargs):
        ...

    def enter_room(self, sid, room, namespace=None):
        ...

    def leave_room(self, sid, room, namespace=None):
        ...


class BroadcastRouter:
    """Доставляет события нужной аудитории: себе, комнате или комнате без отправителя."""

    def __init__(self, transport: Transport, registry: SessionRegistry):
        self.transport = transport
        self.registry = registry

    def _emit(self, event: OutboundEvent, payload: Any, **kwargs) -> None:
        # Сигналы без данных уходят клиенту без аргументов
        if payload is None:
            self.transport.emit(event.value, **kwargs)
        else:
            self.transport.emit(event.value, payload, **kwargs)

    def emit_to_self(self, sid: str, event: OutboundEvent, payload: Any = None) -> None:
        self._emit(event, payload, to=sid)

    def emit_to_room(self, room_id: str, event: OutboundEvent, payload: Any = None) -> None:
        self._emit(event, payload, to=room_id)

    def emit_to_room_except_sender(self, room_id: str, sid: str, event: OutboundEvent, payload: Any = None) -> None:
        self._emit(event, payload, to=room_id, skip_sid=sid)

    def join_room(self, sid: str, room_id: str) -> None:
        self.transport.enter_room(sid, room_id)

    def leave_room(self, sid: str, room_id: str) -> None:
        self.transport.leave_room(sid, room_id)

    def find_opponent(self, sid: str) -> Optional[User]:
        """Ищет в комнате игрока другого цвета."""
        user = self.registry.find(sid)
        if user is None:
            return None
        for other in self.registry.list_in_room(user.room_id):
            if other.role is not user.role and other.role is not Role.SPECTATOR:
                return other
        return None
