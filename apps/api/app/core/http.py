from typing import Optional

from fastapi.responses import JSONResponse


def ok(data=None, message: Optional[str] = None, status: int = 200, **extra) -> JSONResponse:
    payload = {"success": True}
    if message:
        payload["message"] = message
    if data is not None:
        payload["data"] = data
    payload.update(extra)
    return JSONResponse(payload, status_code=status)


def fail(message="Bad Request", status: int = 400, code: Optional[str] = None, details=None, headers=None) -> JSONResponse:
    payload = {"success": False, "error": message}
    if code:
        payload["code"] = code
    if details:
        payload["details"] = details
    return JSONResponse(payload, status_code=status, headers=headers)
