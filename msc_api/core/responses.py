"""
responses.py

JSON envelope used by every endpoint.

- success : {"success": true,  "message": str | null, "data": any}
- error   : {"success": false, "message": str}
- validation error adds "errors": {field: message}

Handlers return success(...) as a plain dict (status code set on the
route decorator, cookies set on the injected Response); the exception
handlers in msc_api.main build error responses.

"""

from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def success(data: Any = None, message: str | None = None) -> dict:
    return {"success": True, "message": message, "data": data}


def error(message: str, status_code: int, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
        headers=headers,
    )


def validation_error(errors: dict[str, str], message: str = "Validation failed") -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content=jsonable_encoder({"success": False, "message": message, "errors": errors}),
    )
