from fastapi import Request
from fastapi.responses import JSONResponse

# request.state 에 남기는 라우팅 실패 종류 (미들웨어 로그용)
METHOD_MISS = "method"


class PortBindError(OSError):
    # 리스닝 포트 바인딩 실패 (이미 사용 중, 권한 없음 등)
    def __init__(self, host: str, port: int, reason: str):
        super().__init__(f"could not bind {host}:{port}: {reason}")
        self.host = host
        self.port = port
        self.reason = reason


async def not_found_handler(request: Request, exc: Exception):
    # 메서드 불일치(405)도 경로 불일치와 동일한 404 로 응답
    request.state.route_miss = METHOD_MISS
    return JSONResponse({"detail": "Not Found"}, status_code=404)
