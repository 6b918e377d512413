"""Static API description served at GET /docs."""

from fastapi import APIRouter, Depends

from apps.api.core.auth import API_KEY_HEADER
from apps.api.core.config import Settings
from apps.api.deps import get_app_settings

router = APIRouter(tags=["docs"])

AUTH_REQUIRED = f"{API_KEY_HEADER} header required"
NO_AUTH = "None required"

ENDPOINTS = {
    "GET /health": {
        "description": "Health check endpoint",
        "authentication": NO_AUTH,
    },
    "POST /generate-key": {
        "description": "Generate a new API key",
        "authentication": NO_AUTH,
        "body": {"name": "optional key name"},
    },
    "POST /store-transactions": {
        "description": "Replace the transactions stored for the API key",
        "authentication": AUTH_REQUIRED,
        "body": {"transactions": "array of {amount, date, vpa, reference}"},
    },
    "GET /transactions": {
        "description": "Get all transactions for the authenticated key",
        "authentication": AUTH_REQUIRED,
    },
    "GET /transactions/{id}": {
        "description": "Get a single transaction by id",
        "authentication": AUTH_REQUIRED,
    },
    "GET /admin/keys": {
        "description": "List all API keys with their transaction counts",
        "authentication": NO_AUTH,
    },
    "DELETE /admin/keys/{apiKey}": {
        "description": "Delete an API key and its stored transactions",
        "authentication": NO_AUTH,
    },
    "GET /docs": {
        "description": "This document",
        "authentication": NO_AUTH,
    },
}


@router.get("/docs")
async def api_docs(settings: Settings = Depends(get_app_settings)):
    return {
        "title": "SMS Bank Reader API Documentation",
        "version": settings.APP_VERSION,
        "endpoints": ENDPOINTS,
        "errors": {
            "400": "Invalid data format (e.g. transactions is not an array)",
            "401": "API key is required / Invalid API key",
            "404": "API key not found / Transaction not found",
            "500": "Internal server error",
        },
        "sampleRequest": {
            "method": "GET",
            "url": "/transactions",
            "headers": {API_KEY_HEADER: "<your-api-key>"},
        },
    }
