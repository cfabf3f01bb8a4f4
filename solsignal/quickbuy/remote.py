"""Quote/swap client for a remote SolSignal API (``/quickbuy``), same surface as ``JupiterClient``."""
from typing import Any, Dict, Optional

import requests

from config.settings import get_settings
from solsignal.errors import QuoteError, QuoteTimeoutError
from solsignal.quickbuy.jupiter import Quote, QuoteRequest
from solsignal.utils.logging import get_logger

logger = get_logger(__name__)


class ApiQuoteClient:
    """Used by frontends that reach the aggregator through the API instead of directly."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.API_URL).rstrip("/")
        self.timeout = timeout or settings.QUOTE_TIMEOUT_SECONDS
        self.session = session or requests.Session()

    def _call(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        try:
            response = self.session.request(method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs)
        except requests.Timeout as e:
            raise QuoteTimeoutError(f"API did not respond within {self.timeout}s") from e
        except requests.RequestException as e:
            raise QuoteError(f"API request failed: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = None
        if response.status_code != 200:
            details = None
            if isinstance(data, dict):
                details = data.get("details") or data.get("error")
            raise QuoteError(details or f"API error: {response.status_code}")
        if not isinstance(data, dict):
            raise QuoteError("API returned a non-JSON response")
        return data

    def get_quote(self, request: QuoteRequest) -> Quote:
        data = self._call("GET", "/quickbuy/quote", params={
            "tokenAddress": request.token_address,
            "solAmount": request.sol_amount,
            "slippage": request.slippage_percent,
        })
        try:
            return Quote(
                request=request,
                out_amount=float(data["outAmount"]),
                price=float(data["price"]),
                price_impact_pct=float(data.get("priceImpactPct") or 0),
                raw=data.get("quoteResponse") or {},
            )
        except (KeyError, TypeError, ValueError) as e:
            raise QuoteError(f"Unexpected quote response: {e}") from e

    def build_swap_transaction(self, quote_response: Dict[str, Any], user_public_key: str) -> str:
        data = self._call("POST", "/quickbuy/swap", json={
            "quoteResponse": quote_response,
            "userPublicKey": user_public_key,
        })
        transaction = data.get("swapTransaction")
        if not transaction:
            raise QuoteError("No swap transaction returned")
        return transaction
