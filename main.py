import eventlet
from eventlet import wsgi
from loguru import logger

from chessroom.config import load_settings
from chessroom.logs import setup_logging
from chessroom.server import create_server

settings = load_settings()
setup_logging(settings.log_level)

sio, app, session = create_server(settings)

if __name__ == '__main__':
    logger.info(f"Запуск сервера на http://{settings.host}:{settings.port}")
    wsgi.server(eventlet.listen((settings.host, settings.port)), app)
