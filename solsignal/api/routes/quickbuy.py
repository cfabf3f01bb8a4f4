"""
Quick-buy pass-through endpoints.

Quotes and unsigned swap transactions come straight from the aggregator;
signing and submission happen in the user's wallet.
"""
from functools import lru_cache
from typing import Any, Dict

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from solsignal.errors import InvalidPayloadError
from solsignal.quickbuy import JupiterClient, QuoteRequest, is_valid_amount
from solsignal.utils.constants import DEFAULT_SLIPPAGE_PERCENT, MAX_BUY_SOL

router = APIRouter()


@lru_cache()
def get_jupiter_client() -> JupiterClient:
    return JupiterClient()


class SwapRequest(BaseModel):
    quote_response: Dict[str, Any] = Field(alias="quoteResponse")
    user_public_key: str = Field(alias="userPublicKey", min_length=1)


@router.get("/quote")
def get_quote(
    token_address: str = Query(..., alias="tokenAddress", min_length=1),
    sol_amount: float = Query(..., alias="solAmount"),
    slippage: float = Query(DEFAULT_SLIPPAGE_PERCENT, gt=0, le=50, description="Slippage tolerance in percent"),
    client: JupiterClient = Depends(get_jupiter_client),
):
    """
    Quote ``solAmount`` SOL into ``tokenAddress``.
    """
    if not is_valid_amount(sol_amount):
        raise InvalidPayloadError(f"solAmount must be greater than 0 and at most {MAX_BUY_SOL:g}")
    quote = client.get_quote(QuoteRequest(token_address, sol_amount, slippage))
    return quote.to_dict()


@router.post("/swap")
def build_swap(body: SwapRequest, client: JupiterClient = Depends(get_jupiter_client)):
    """
    Unsigned swap transaction for a previously fetched quote.
    """
    tx = client.build_swap_transaction(body.quote_response, body.user_public_key)
    return {"swapTransaction": tx}
