from typing import Optional, Tuple

import socketio
from loguru import logger

from chessroom.config import Settings
from chessroom.handler import SessionEventHandler
from chessroom.models.events import InboundEvent


def _relay(session: SessionEventHandler, event: InboundEvent):
    def handle(sid, *args):
        session.dispatch(event, sid, args[0] if args else None)

    return handle


def register_handlers(sio: socketio.Server, session: SessionEventHandler) -> None:
    """Привязывает события Socket.IO к обработчикам сессии."""

    # Обрабатываем подключение пользователя
    @sio.event
    def connect(sid, environ):
        session.on_connect(sid)

    # Обрабатываем отключение пользователя
    @sio.event
    def disconnect(sid, *args):
        session.on_disconnect(sid)

    for event in InboundEvent:
        if event is InboundEvent.DISCONNECT:
            continue
        sio.on(event.value, handler=_relay(session, event))


def create_server(
    settings: Optional[Settings] = None, async_mode: str = "eventlet"
) -> Tuple[socketio.Server, socketio.WSGIApp, SessionEventHandler]:
    settings = settings or Settings()
    sio = socketio.Server(cors_allowed_origins=settings.cors_origins(), async_mode=async_mode)
    app = socketio.WSGIApp(sio)

    session = SessionEventHandler(sio, settings=settings)
    register_handlers(sio, session)
    logger.debug(f"Зарегистрировано событий: {len(InboundEvent)}")
    return sio, app, session
