from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field

from foodgarden.core.modules.session.models import TOKEN_COOKIE_NAME

# Routes reachable without a session cookie.
PUBLIC_ENDPOINTS = {
    ("GET", "/"),
    ("POST", "/jwt"),
    ("POST", "/logout"),
    ("GET", "/foods"),
    ("GET", "/foods/{food_id}"),
}


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="Food Garden API",
            version="0.1.0",
            summary="Food listings with notes and cookie-based JWT sessions",
            routes=app.routes,
        )

        security_schemes = openapi_schema.setdefault("components", {}).setdefault("securitySchemes", {})
        security_schemes["TokenCookie"] = {
            "type": "apiKey",
            "in": "cookie",
            "name": TOKEN_COOKIE_NAME,
            "description": "Signed session token set by POST /jwt",
        }
        openapi_schema["security"] = [{"TokenCookie": []}]

        for path, path_item in openapi_schema["paths"].items():
            for method, operation in path_item.items():
                if (method.upper(), path) in PUBLIC_ENDPOINTS:
                    operation["security"] = []

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    ok: bool = Field(False, description="Always false for errors")
    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")
    reason: str | None = Field(None, description="Rejection reason for authentication errors")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"ok": False, "message": "Unauthorized, no token found", "type": "authentication_error", "reason": "no_token"},
                {"ok": False, "message": "Food not found", "type": "not_found"},
                {"ok": False, "message": "Email is required", "type": "validation_error"},
            ]
        }
    }


class MessageResponse(BaseModel):
    """Success envelope for operations without a document body."""

    ok: bool = Field(True, description="Always true on success")
    message: str = Field(..., description="Human-readable result")
