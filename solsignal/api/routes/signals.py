"""
Signal ingestion and query endpoints.
"""
from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool

from solsignal.services import SignalService, get_signal_service, parse_body

router = APIRouter()


@router.get("")
def list_signals(service: SignalService = Depends(get_signal_service)):
    """
    All stored signals, newest first.
    """
    return {"signals": service.list()}


@router.post("", status_code=201)
async def create_signal(request: Request, service: SignalService = Depends(get_signal_service)):
    """
    Ingest one signal. ``id`` and ``timestamp`` are filled in when absent.
    """
    payload = parse_body(await request.body())
    result = await run_in_threadpool(service.create, payload)
    return {
        "success": True,
        "message": "Signal added successfully",
        "signalId": result.signal_id,
        "totalSignals": result.total_signals,
    }
