"""Jupiter v6 quote/swap client using requests."""
import math
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests

from config.settings import get_settings
from solsignal.errors import QuoteError, QuoteTimeoutError
from solsignal.utils.constants import (
    DEFAULT_SLIPPAGE_PERCENT,
    DEFAULT_TOKEN_DECIMALS,
    LAMPORTS_PER_SOL,
    SOL_MINT,
)
from solsignal.utils.logging import get_logger
from solsignal.utils.metrics import record_quote

logger = get_logger(__name__)


@dataclass
class QuoteRequest:
    """Inputs that determine a quote; a change in any of them needs a fresh quote."""
    token_address: str
    sol_amount: float
    slippage_percent: float = DEFAULT_SLIPPAGE_PERCENT

    @property
    def lamports(self) -> int:
        return math.floor(self.sol_amount * LAMPORTS_PER_SOL)

    @property
    def slippage_bps(self) -> int:
        return int(round((self.slippage_percent or DEFAULT_SLIPPAGE_PERCENT) * 100))


@dataclass
class Quote:
    """Reshaped aggregator quote. ``raw`` is the untouched response, needed for the swap call."""
    request: QuoteRequest
    out_amount: float
    price: float
    price_impact_pct: float
    raw: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'tokenAddress': self.request.token_address,
            'solAmount': self.request.sol_amount,
            'slippageBps': self.request.slippage_bps,
            'outAmount': self.out_amount,
            'price': self.price,
            'priceImpactPct': self.price_impact_pct,
            'quoteResponse': self.raw,
        }


class JupiterClient:
    """Thin pass-through to the aggregator's quote and swap endpoints."""

    def __init__(
        self,
        quote_url: Optional[str] = None,
        swap_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        token_decimals: int = DEFAULT_TOKEN_DECIMALS,
    ):
        settings = get_settings()
        self.quote_url = quote_url or settings.JUPITER_QUOTE_URL
        self.swap_url = swap_url or settings.JUPITER_SWAP_URL
        self.timeout = timeout or settings.QUOTE_TIMEOUT_SECONDS
        self.session = session or requests.Session()
        self.token_decimals = token_decimals

    def _call(self, method: str, url: str, **kwargs) -> Dict[str, Any]:
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.Timeout as e:
            raise QuoteTimeoutError(f"Aggregator did not respond within {self.timeout}s") from e
        except requests.RequestException as e:
            raise QuoteError(f"Aggregator request failed: {e}") from e

        if response.status_code != 200:
            raise QuoteError(f"Aggregator API error: {response.status_code}")
        try:
            data = response.json()
        except ValueError as e:
            raise QuoteError("Aggregator returned a non-JSON response") from e
        if isinstance(data, dict) and data.get('error'):
            raise QuoteError(str(data['error']))
        return data

    def get_quote(self, request: QuoteRequest) -> Quote:
        """Price ``request.sol_amount`` SOL into the target token."""
        if not request.token_address or not request.sol_amount or request.sol_amount <= 0:
            raise QuoteError("A token address and a positive SOL amount are required")

        params = {
            'inputMint': SOL_MINT,
            'outputMint': request.token_address,
            'amount': str(request.lamports),
            'slippageBps': str(request.slippage_bps),
            'onlyDirectRoutes': 'false',
            'asLegacyTransaction': 'false',
        }
        started = time.monotonic()
        try:
            data = self._call('GET', self.quote_url, params=params)
            quote = self._reshape(request, data)
        except QuoteTimeoutError:
            record_quote('timeout', time.monotonic() - started)
            raise
        except QuoteError as e:
            record_quote('error', time.monotonic() - started)
            logger.warning(f"Quote failed for {request.token_address}: {e.details}")
            raise
        record_quote('ok', time.monotonic() - started)
        return quote

    def _reshape(self, request: QuoteRequest, data: Dict[str, Any]) -> Quote:
        try:
            out_amount = float(data['outAmount']) / (10 ** self.token_decimals)
            impact = float(data.get('priceImpactPct') or 0)
        except (KeyError, TypeError, ValueError) as e:
            raise QuoteError(f"Unexpected quote response: {e}") from e
        return Quote(
            request=request,
            out_amount=round(out_amount, 6),
            price=round(out_amount / request.sol_amount, 6),
            price_impact_pct=impact,
            raw=data,
        )

    def build_swap_transaction(self, quote_response: Dict[str, Any], user_public_key: str) -> str:
        """Ask the aggregator for an unsigned, base64-encoded swap transaction."""
        data = self._call('POST', self.swap_url, json={
            'quoteResponse': quote_response,
            'userPublicKey': user_public_key,
            'wrapAndUnwrapSol': True,
            'computeUnitPriceMicroLamports': 'auto',
        })
        tx = data.get('swapTransaction') if isinstance(data, dict) else None
        if not tx:
            raise QuoteError("No swap transaction returned")
        return tx
