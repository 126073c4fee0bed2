from contextvars import ContextVar, Token
from typing import Tuple

trace_id_var: ContextVar[str] = ContextVar("trace_id", default="-")
client_ip_var: ContextVar[str] = ContextVar("client_ip", default="-")

RequestTokens = Tuple[Token, Token]


def bind_request(trace_id: str, client_ip: str) -> RequestTokens:
    # 요청 처리 동안 로그 포매터가 읽을 값 등록
    return trace_id_var.set(trace_id), client_ip_var.set(client_ip)


def release_request(tokens: RequestTokens):
    trace_token, ip_token = tokens
    trace_id_var.reset(trace_token)
    client_ip_var.reset(ip_token)
