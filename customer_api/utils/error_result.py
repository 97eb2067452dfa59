"""JSON error responses.

Error bodies share one shape: ``{"errors": {"<key>": ["<message>", ...]}}``.
"""
import json
from typing import Dict, List

from starlette.responses import Response
from starlette.types import Receive, Scope, Send


class ErrorResult(Response):
    """Writes an already-serialised JSON string with the given status code."""

    media_type = "application/json"

    def __init__(self, json_string: str, status_code: int):
        super().__init__(content=json_string, status_code=status_code, media_type=self.media_type)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope is None:
            raise TypeError("scope is required to write the error response")
        await super().__call__(scope, receive, send)


def serialize_errors(errors: Dict[str, List[str]]) -> str:
    return json.dumps({"errors": errors})


def error_result(key: str, message: str, status_code: int) -> ErrorResult:
    return ErrorResult(serialize_errors({key: [message]}), status_code)
