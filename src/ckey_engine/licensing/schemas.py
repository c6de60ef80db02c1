"""Pydantic schemas for key issuance and verification endpoints."""

from pydantic import BaseModel, Field


class KeyCreate(BaseModel):
    name: str
    count: int = Field(default=1, ge=1)


class KeyBatchResponse(BaseModel):
    name: str
    keys: list[str]


class VerifyRequest(BaseModel):
    name: str
    key: str


class VerifyResponse(BaseModel):
    valid: bool
    code: str = ""
    message: str = ""
