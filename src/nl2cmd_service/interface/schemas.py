"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Nl2CmdRequest(BaseModel):
    """Request body for ``POST /nl2CmdFlow``."""

    nl2cmd: str = Field(description="Describes a terminal command in natural language")


class Nl2CmdResponse(BaseModel):
    """Successful response from ``POST /nl2CmdFlow``."""

    cmd: str
    runnable: bool


class FlowRequest(BaseModel):
    """Flow envelope form of the request: ``{"data": {"nl2cmd": ...}}``."""

    data: Nl2CmdRequest


class FlowResponse(BaseModel):
    """Flow envelope form of the response: ``{"result": {...}}``."""

    result: Nl2CmdResponse


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
