import socket
import sys
import uvicorn
from fastapi import FastAPI
from greeter.core.config import Settings
from greeter.core.errors import PortBindError
from greeter.core.logger import logger


def bind_socket(host: str, port: int) -> socket.socket:
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)

    # TIME_WAIT 상태의 포트 재사용만 허용 (LISTEN 중인 포트는 여전히 실패)
    if sys.platform != "win32":
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)

    try:
        sock.bind((host, port))
    except OSError as e:
        sock.close()
        logger.error("PORT_BIND_FAILED", extra={
            "host": host,
            "port": port,
            "error": str(e)
        })
        raise PortBindError(host, port, e.strerror or str(e)) from e

    return sock


def serve(app: FastAPI, settings: Settings):
    try:
        sock = bind_socket(settings.HOST, settings.PORT)
    except PortBindError:
        raise SystemExit(1)

    # 포트 0 지정 시 실제 할당된 포트를 시작 로그에 사용
    app.state.port = sock.getsockname()[1]

    config = uvicorn.Config(
        app,
        log_level=settings.LOG_LEVEL.lower(),
        # 요청 로그는 RequestLoggingMiddleware 가 담당
        access_log=False,
    )
    server = uvicorn.Server(config)
    server.run(sockets=[sock])
