"""Pydantic schemas for the keys domain."""

from typing import Optional

from pydantic import BaseModel


class GenerateKeyRequest(BaseModel):
    name: Optional[str] = None


class KeyInfo(BaseModel):
    name: str
    isActive: bool
    createdAt: str
    lastUsed: Optional[str] = None


class GenerateKeyResponse(BaseModel):
    success: bool = True
    apiKey: str
    message: str
    keyInfo: KeyInfo


class KeySummary(BaseModel):
    """One row of the admin key listing."""

    apiKey: str
    name: str
    isActive: bool
    createdAt: str
    lastUsed: Optional[str] = None
    transactionCount: int


class KeyListResponse(BaseModel):
    totalKeys: int
    keys: list[KeySummary]


class DeleteKeyResponse(BaseModel):
    success: bool = True
    message: str
