"""Общие фикстуры: фейковый транспорт Socket.IO и сессия поверх него."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import pytest

from chessroom.config import Settings
from chessroom.handler import SessionEventHandler


class FakeTransport:
    """Повторяет комнаты и emit из socketio.Server и записывает доставку."""

    def __init__(self) -> None:
        self.rooms: Dict[str, List[str]] = {}
        self.inbox: Dict[str, List[Tuple[str, tuple]]] = {}

    def connect(self, sid: str) -> None:
        # Каждое соединение сидит в личной комнате с именем своего sid
        self.rooms[sid] = [sid]
        self.inbox[sid] = []

    def disconnect(self, sid: str) -> None:
        for members in self.rooms.values():
            if sid in members:
                members.remove(sid)

    def enter_room(self, sid: str, room: str, namespace: Optional[str] = None) -> None:
        members = self.rooms.setdefault(room, [])
        if sid not in members:
            members.append(sid)

    def leave_room(self, sid: str, room: str, namespace: Optional[str] = None) -> None:
        members = self.rooms.get(room, [])
        if sid in members:
            members.remove(sid)

    def emit(self, event, data=None, to=None, room=None, skip_sid=None, namespace=None, callback=None, **kwargs):
        target = to or room
        args = () if data is None else (data,)
        for sid in self.rooms.get(target, []):
            if sid != skip_sid:
                self.inbox[sid].append((event, args))

    def received(self, sid: str, event: Optional[str] = None) -> List[Tuple[str, tuple]]:
        return [item for item in self.inbox[sid] if event is None or item[0] == event]

    def payloads(self, sid: str, event: str) -> List[Any]:
        return [args[0] if args else None for _, args in self.received(sid, event)]

    def clear(self) -> None:
        for messages in self.inbox.values():
            messages.clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(strict_slots=True, evict_empty_rooms=False)


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def session(transport: FakeTransport, settings: Settings) -> SessionEventHandler:
    return SessionEventHandler(transport, settings=settings)


@pytest.fixture
def connect(transport: FakeTransport, session: SessionEventHandler):
    """Подключает соединение так, как это делает сервер."""

    def _connect(sid: str) -> str:
        transport.connect(sid)
        session.on_connect(sid)
        return sid

    return _connect


@pytest.fixture
def disconnect(transport: FakeTransport, session: SessionEventHandler):
    def _disconnect(sid: str) -> None:
        session.on_disconnect(sid)
        transport.disconnect(sid)

    return _disconnect


@pytest.fixture
def game_room(connect, session: SessionEventHandler, transport: FakeTransport):
    """Комната R1: Alice белыми, Bob чёрными, Carl зрителем."""
    connect("A")
    connect("B")
    connect("C")
    session.dispatch("createRoom", "A", {"name": "Alice", "roomId": "R1", "type": "white"})
    session.dispatch("enterRoom", "B", {"name": "Bob", "roomId": "R1", "type": "black"})
    session.dispatch("enterRoom", "C", {"name": "Carl", "roomId": "R1", "type": "spectator"})
    transport.clear()
    return session
