"""
Envelope responses.

Every API route answers with {"success": bool, "data"?: ..., "error"?: str}.
"""
from typing import Any
from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def ok(data: Any) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={"success": True, "data": jsonable_encoder(data, by_alias=True)},
    )


def bad(error: str) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"success": False, "error": error})


def not_found(error: str = "not found") -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"success": False, "error": error})


def server_error(error: str = "Internal server error") -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "error": error},
    )
