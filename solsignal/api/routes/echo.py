"""
Connectivity test endpoint for signal producers.
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Request

from solsignal.errors import InvalidPayloadError
from solsignal.services import load_json
from solsignal.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("")
def echo_info():
    return {
        "message": "Test endpoint is working!",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "instructions": "Send a POST request to test data reception",
    }


@router.post("")
async def echo(request: Request):
    """Return whatever JSON was posted."""
    try:
        body = load_json(await request.body())
    except ValueError as e:
        raise InvalidPayloadError(str(e))
    logger.info(f"Test endpoint received: {body}")
    return {
        "success": True,
        "message": "Test endpoint working!",
        "receivedData": body,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
