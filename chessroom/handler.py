from functools import partial
from typing import Any, Callable, Dict, Optional

from loguru import logger
from pydantic import ValidationError

from chessroom.board_cache import BoardStateCache
from chessroom.config import Settings
from chessroom.errors import RoomNotFoundError, SlotUnavailableError, UserNotFoundError
from chessroom.models.events import (
    GAME_END_EVENTS,
    BoardStateUpdate,
    InboundEvent,
    JoinRequest,
    OutboundEvent,
)
from chessroom.models.message import build_message
from chessroom.models.user import GameInfo, Role, User
from chessroom.registry import SessionRegistry
from chessroom.roles import RoleAssigner
from chessroom.router import BroadcastRouter, Transport

Handler = Callable[[str, Any], None]


class SessionEventHandler:
    """Обрабатывает входящие события и владеет состоянием сервера.

    Реестр пользователей и кэш досок меняются только отсюда. Обработчики
    синхронные: транспорт вызывает их по одному, поэтому блокировок нет.
    """

    def __init__(
        self,
        transport: Transport,
        settings: Optional[Settings] = None,
        registry: Optional[SessionRegistry] = None,
        cache: Optional[BoardStateCache] = None,
    ):
        self.settings = settings or Settings()
        self.registry = registry if registry is not None else SessionRegistry()
        self.cache = cache if cache is not None else BoardStateCache()
        self.roles = RoleAssigner(strict_slots=self.settings.strict_slots)
        self.router = BroadcastRouter(transport, self.registry)

        self.handlers: Dict[InboundEvent, Handler] = {
            InboundEvent.CREATE_ROOM: self.on_create_room,
            InboundEvent.ENTER_ROOM: self.on_enter_room,
            InboundEvent.MESSAGE: self.on_message,
            InboundEvent.IN_CHECK: self.on_in_check,
            InboundEvent.TURN_OVER: self.on_turn_over,
            InboundEvent.BOARD_STATE: self.on_board_state,
            InboundEvent.GET_BOARD_STATE: self.on_get_board_state,
            InboundEvent.DISCONNECT: self.on_disconnect,
        }
        for event in GAME_END_EVENTS:
            self.handlers[event] = partial(self.on_game_end, event)

        missing = set(InboundEvent) - set(self.handlers)
        if missing:
            raise RuntimeError(f"No handler for events: {sorted(e.value for e in missing)}")

    def dispatch(self, event, sid: str, data: Any = None) -> None:
        """Передаёт событие его обработчику."""
        self.handlers[InboundEvent(event)](sid, data)

    def admin_message(self, text: str) -> dict:
        return build_message(self.settings.admin_name, text)

    def _parse(self, model, event: InboundEvent, sid: str, data: Any):
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            logger.warning(f"Некорректные данные {event.value} от {sid}: {exc.errors()}")
            return None

    def _acting_user(self, sid: str, event: InboundEvent) -> Optional[User]:
        try:
            return self.registry.get(sid)
        except UserNotFoundError:
            logger.debug(f"{event.value} от неизвестного соединения {sid} пропущено")
            return None

    def _admit(self, sid: str, request: JoinRequest) -> User:
        previous = self.registry.find(sid)
        if previous is not None and previous.room_id != request.room_id:
            # Соединение переходит в другую комнату: старые рассылки ему больше не нужны
            self.router.leave_room(sid, previous.room_id)
        user = User(sid=sid, name=request.name, room_id=request.room_id, role=request.role)
        self.registry.add_or_replace(user)
        self.router.join_room(sid, user.room_id)
        logger.info(f"Пользователь {user.name} (sid={sid}) присоединился к комнате {user.room_id} как {user.role.value}")
        return user

    # Подключение соединения
    def on_connect(self, sid: str) -> None:
        logger.info(f"Пользователь {sid} подключился")
        self.router.emit_to_self(sid, OutboundEvent.MESSAGE, self.admin_message(self.settings.welcome_text))

    def on_create_room(self, sid: str, data: Any) -> None:
        request = self._parse(JoinRequest, InboundEvent.CREATE_ROOM, sid, data)
        if request is None:
            return

        try:
            self.roles.check_create(request.room_id, self.registry.list_in_room(request.room_id), request.role, sid=sid)
        except SlotUnavailableError:
            self.router.emit_to_self(sid, OutboundEvent.TURN_TO_SPECTATOR)
            return

        user = self._admit(sid, request)
        self.router.emit_to_self(
            sid, OutboundEvent.MESSAGE, self.admin_message(f"{user.name}, your room id is: {user.room_id}")
        )

    def on_enter_room(self, sid: str, data: Any) -> None:
        request = self._parse(JoinRequest, InboundEvent.ENTER_ROOM, sid, data)
        if request is None:
            return

        room_users = self.registry.list_in_room(request.room_id)
        try:
            self.roles.check_enter(request.room_id, room_users, request.role, sid=sid)
        except RoomNotFoundError:
            self.router.emit_to_self(
                sid,
                OutboundEvent.MESSAGE,
                self.admin_message(f"Room {request.room_id} does not exist. Please refresh and enter a valid room"),
            )
            return
        except SlotUnavailableError:
            # Клиент сам перезайдёт зрителем
            self.router.emit_to_self(sid, OutboundEvent.TURN_TO_SPECTATOR)
            return

        user = self._admit(sid, request)
        if user.role is Role.SPECTATOR:
            snapshot = self.cache.get(user.room_id)
            self.router.emit_to_self(sid, OutboundEvent.GET_BOARD_STATE, snapshot.to_payload() if snapshot else None)
            self.router.emit_to_self(
                sid, OutboundEvent.MESSAGE,
                self.admin_message(f"{user.name} have joined room {user.room_id} as a spectator"),
            )
            self.router.emit_to_room_except_sender(
                user.room_id, sid, OutboundEvent.MESSAGE,
                self.admin_message(f"{user.name} has joined the room as a spectator"),
            )
            return

        # Второй игрок сел за доску: партия начинается заново для обоих
        for player in self.registry.list_in_room(user.room_id):
            if player.role.is_player:
                player.game = GameInfo()
        self.router.emit_to_room(user.room_id, OutboundEvent.GAME_START, user.game.model_dump(by_alias=True))
        logger.info(f"Партия в комнате {user.room_id} началась")
        self.router.emit_to_self(
            sid, OutboundEvent.MESSAGE, self.admin_message(f"{user.name} have joined room {user.room_id}")
        )
        self.router.emit_to_room_except_sender(
            user.room_id, sid, OutboundEvent.MESSAGE, self.admin_message(f"{user.name} has joined the room")
        )

    def on_message(self, sid: str, text: Any) -> None:
        user = self._acting_user(sid, InboundEvent.MESSAGE)
        if user is None:
            return
        try:
            payload = build_message(user.name, text)
        except ValidationError:
            logger.warning(f"Некорректное сообщение от {user.name} (sid={sid})")
            return
        self.router.emit_to_room(user.room_id, OutboundEvent.MESSAGE, payload)

    def on_in_check(self, sid: str, data: Any = None) -> None:
        opponent = self.router.find_opponent(sid)
        if opponent is None:
            return
        self.router.emit_to_room(opponent.room_id, OutboundEvent.IN_CHECK, f"{opponent.name} is in check!")

    def on_game_end(self, event: InboundEvent, sid: str, data: Any = None) -> None:
        user = self._acting_user(sid, event)
        if user is None:
            return
        logger.info(f"Комната {user.room_id}: {event.value} от {user.name}")
        self.router.emit_to_room(user.room_id, OutboundEvent(event.value))

    def on_turn_over(self, sid: str, move: Any) -> None:
        user = self._acting_user(sid, InboundEvent.TURN_OVER)
        if user is None:
            return
        self.router.emit_to_room_except_sender(user.room_id, sid, OutboundEvent.TURN_OVER, move)

    def on_board_state(self, sid: str, data: Any) -> None:
        # Комната берётся из данных, а не из записи пользователя
        update = self._parse(BoardStateUpdate, InboundEvent.BOARD_STATE, sid, data)
        if update is None:
            return
        self.cache.put(update.room_id, update.board_state)

    def on_get_board_state(self, sid: str, data: Any = None) -> None:
        user = self.registry.find(sid)
        snapshot = self.cache.get(user.room_id if user else None)
        self.router.emit_to_self(sid, OutboundEvent.GET_BOARD_STATE, snapshot.to_payload() if snapshot else None)

    def on_disconnect(self, sid: str, data: Any = None) -> None:
        user = self.registry.remove(sid)
        if user is None:
            logger.info(f"Пользователь {sid} отключился")
            return

        logger.info(f"Пользователь {user.name} (sid={sid}) отключился")
        self.router.emit_to_room(
            user.room_id, OutboundEvent.MESSAGE, self.admin_message(f"{user.name} has left the room")
        )
        if self.settings.evict_empty_rooms and not self.registry.room_exists(user.room_id):
            self.cache.discard(user.room_id)
