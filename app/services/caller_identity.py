from __future__ import annotations

from fastapi import Request


def parse_user_id(raw_value: str | None) -> int | None:
    if raw_value is None:
        return None
    candidate = raw_value.strip()
    if not (candidate.isascii() and candidate.isdecimal()):
        return None
    user_id = int(candidate)
    if user_id <= 0:
        return None
    return user_id


def extract_caller_user_id(request: Request, *, header_name: str) -> int | None:
    """Caller id as forwarded by the authentication gateway in front of the API."""
    return parse_user_id(request.headers.get(header_name))
