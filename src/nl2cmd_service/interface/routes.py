"""API routes — thin controllers that delegate to the flow."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from nl2cmd_service.domain.entities import CommandRequest
from nl2cmd_service.interface.dependencies import get_flow
from nl2cmd_service.interface.schemas import (
    ErrorResponse,
    FlowRequest,
    FlowResponse,
    Nl2CmdRequest,
    Nl2CmdResponse,
)
from nl2cmd_service.services.nl2cmd_flow import FLOW_NAME, Nl2CmdFlow

router = APIRouter()


@router.post(
    f"/{FLOW_NAME}",
    response_model=Nl2CmdResponse | FlowResponse,
    responses={
        422: {"model": ErrorResponse, "description": "Malformed request body"},
        500: {"model": ErrorResponse, "description": "Prompt template missing or broken"},
        502: {"model": ErrorResponse, "description": "LLM provider error or malformed model output"},
    },
)
async def nl2cmd_flow(
    body: Nl2CmdRequest | FlowRequest,
    flow: Nl2CmdFlow = Depends(get_flow),
) -> Nl2CmdResponse | FlowResponse:
    """Generate a terminal command from a natural-language description."""
    enveloped = isinstance(body, FlowRequest)
    payload = body.data if enveloped else body

    result = await flow.execute(CommandRequest(description=payload.nl2cmd))
    response = Nl2CmdResponse(cmd=result.command, runnable=result.runnable)
    return FlowResponse(result=response) if enveloped else response
