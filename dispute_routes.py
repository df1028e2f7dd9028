# app/dispute_routes.py
"""
HTTP endpoints over DisputeService.
JSON envelope, markdown report, and a tool-style call that reports failures in-band.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Depends, Query, Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field, StrictInt

from chain.registry import NETWORK_NAMES, SUPPORTED_CHAIN_IDS
from errors import DisputeDataError, DisputeValidationError
from models import DisputeData, DisputeInput
from services.dispute_service import DisputeService
from views.dispute_report import render_dispute_report, render_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["disputes"])

TOOL_NAME = "get_dispute_data"


def get_dispute_service(request: Request) -> DisputeService:
    service = getattr(request.app.state, "dispute_service", None)
    if service is None:
        raise HTTPException(503, "Dispute service not initialized")
    return service


async def _load(service: DisputeService, dispute_id: str, chain_id: int) -> DisputeData:
    try:
        return await service.get_dispute_data(DisputeInput(dispute_id=dispute_id, chain_id=chain_id))
    except DisputeValidationError as e:
        raise HTTPException(400, str(e))
    except DisputeDataError as e:
        raise HTTPException(502, e.to_dict())
    except Exception as e:
        logger.exception("get_dispute_data(%s, %s) failed", dispute_id, chain_id)
        raise HTTPException(500, f"Failed to retrieve dispute data: {e}")


@router.get("/disputes/{dispute_id}")
async def dispute_data(
    dispute_id: str,
    chain_id: int = Query(..., description="1 for Ethereum Mainnet, 100 for Gnosis Chain"),
    service: DisputeService = Depends(get_dispute_service),
):
    data = await _load(service, dispute_id, chain_id)
    return data.to_dict()


@router.get("/disputes/{dispute_id}/report", response_class=PlainTextResponse)
async def dispute_report(
    dispute_id: str,
    chain_id: int = Query(...),
    service: DisputeService = Depends(get_dispute_service),
):
    data = await _load(service, dispute_id, chain_id)
    return render_dispute_report(data)


class ToolCallRequest(BaseModel):
    model_config = {"populate_by_name": True}
    dispute_id: str = Field(..., alias="disputeId", description="The dispute ID to retrieve data for")
    chain_id: StrictInt = Field(..., alias="chainId", description="The chain ID (1 for Ethereum Mainnet, 100 for Gnosis Chain)")


@router.get("/tools")
def list_tools():
    return [{
        "name": TOOL_NAME,
        "title": "Get Kleros Dispute Data",
        "description": (
            "Retrieve comprehensive dispute data from Kleros including meta-evidence "
            "and evidence submissions from multiple blockchain networks"
        ),
        "inputSchema": ToolCallRequest.model_json_schema(by_alias=True),
        "supportedChains": {str(cid): NETWORK_NAMES[cid] for cid in SUPPORTED_CHAIN_IDS},
    }]


@router.post(f"/tools/{TOOL_NAME}")
async def call_get_dispute_data(req: ToolCallRequest, service: DisputeService = Depends(get_dispute_service)):
    try:
        data = await service.get_dispute_data(DisputeInput(dispute_id=req.dispute_id, chain_id=req.chain_id))
    except (DisputeValidationError, DisputeDataError) as e:
        return {"content": [{"type": "text", "text": render_error(str(e))}], "isError": True}
    except Exception as e:
        logger.exception("Tool call %s failed", TOOL_NAME)
        return {"content": [{"type": "text", "text": render_error(str(e) or "Unknown error occurred")}], "isError": True}

    return {"content": [{"type": "text", "text": render_dispute_report(data)}], "isError": False}
