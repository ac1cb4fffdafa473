"""Map domain exceptions to HTTP responses.

Protean's stock handlers are registered first; the handlers below take over
for the exceptions the ordering domain raises so that every error body has
the same shape: ``{"error": <kind>, "messages": {...}}``.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ExpectedVersionError, InvalidOperationError, ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers

from ordering.errors import ForbiddenError, InvalidStateError, MenuItemsNotFound

_ERROR_KINDS = [
    (ValidationError, 400, "invalid_argument"),
    (ObjectNotFoundError, 404, "not_found"),
    (MenuItemsNotFound, 404, "not_found"),
    (ForbiddenError, 403, "forbidden"),
    (InvalidStateError, 400, "invalid_state"),
    (InvalidOperationError, 400, "invalid_state"),
    (ExpectedVersionError, 409, "conflict"),
]


def _messages(exc: Exception):
    messages = getattr(exc, "messages", None)
    if not messages and exc.args:
        messages = exc.args[0]
    if isinstance(messages, (dict, list, str)):
        return messages
    return {"_entity": [exc.__class__.__name__]}


def _handler(status_code: int, kind: str):
    async def handle(request: Request, exc: Exception) -> JSONResponse:
        body = {"error": kind, "messages": _messages(exc)}
        if isinstance(exc, MenuItemsNotFound):
            body["missing"] = exc.missing
        return JSONResponse(status_code=status_code, content=body)

    return handle


def install_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)
    for exc_class, status_code, kind in _ERROR_KINDS:
        app.add_exception_handler(exc_class, _handler(status_code, kind))
