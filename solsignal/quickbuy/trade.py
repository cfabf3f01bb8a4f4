"""
Quick-buy execution.

quote -> user confirms -> build unsigned tx -> sign -> submit -> confirm.
Signing and submission belong to an external wallet connector. Any failure
along the chain becomes one ``TradeError`` with a user-facing message; nothing
is retried.
"""
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from typing import Optional

from config.settings import get_settings
from solsignal.errors import QuoteError, TradeError
from solsignal.quickbuy.jupiter import JupiterClient, Quote
from solsignal.utils.constants import MAX_BUY_SOL
from solsignal.utils.logging import get_logger
from solsignal.utils.metrics import record_trade

logger = get_logger(__name__)


class WalletConnector(ABC):
    """Connected signing identity, supplied by the wallet integration."""

    @property
    @abstractmethod
    def public_key(self) -> Optional[str]:
        """Base58 public key, or None when no wallet is connected."""

    @abstractmethod
    def sign_transaction(self, transaction_b64: str) -> bytes:
        """Sign a base64 unsigned transaction; raise if the user rejects."""

    @abstractmethod
    def send_transaction(self, signed: bytes) -> str:
        """Submit a signed transaction and return its signature."""

    @abstractmethod
    def confirm_transaction(self, signature: str) -> bool:
        """Block until the transaction is confirmed; False if it landed with an error."""


def is_valid_amount(sol_amount: Optional[float]) -> bool:
    return sol_amount is not None and 0 < sol_amount <= MAX_BUY_SOL


class QuickBuy:
    """Runs one trade at a time for a session."""

    def __init__(self, client: JupiterClient, confirm_timeout: Optional[float] = None):
        self.client = client
        self.confirm_timeout = confirm_timeout or get_settings().CONFIRM_TIMEOUT_SECONDS
        self.executing = False

    def execute_trade(self, quote: Optional[Quote], connector: Optional[WalletConnector]) -> str:
        """Execute ``quote`` through ``connector``; returns the transaction signature."""
        if quote is None or connector is None or not connector.public_key:
            raise TradeError("Wallet not connected or quote not available")
        if not is_valid_amount(quote.request.sol_amount):
            raise TradeError(f"Amount must be between 0 and {MAX_BUY_SOL:g} SOL")
        if self.executing:
            raise TradeError("A trade is already in progress")

        self.executing = True
        try:
            signature = self._run(quote, connector)
        except TradeError as e:
            record_trade('failed')
            logger.error(f"Trade failed for {quote.request.token_address}: {e.details}")
            raise
        finally:
            self.executing = False

        record_trade('confirmed')
        logger.info(f"Bought {quote.out_amount} {quote.request.token_address}: {signature}")
        return signature

    def _run(self, quote: Quote, connector: WalletConnector) -> str:
        try:
            unsigned = self.client.build_swap_transaction(quote.raw, connector.public_key)
        except QuoteError as e:
            raise TradeError(e.details) from e

        try:
            signed = connector.sign_transaction(unsigned)
        except Exception as e:
            raise TradeError(f"Signing rejected: {e}") from e

        try:
            signature = connector.send_transaction(signed)
        except Exception as e:
            raise TradeError(f"Submission rejected: {e}") from e

        executor = ThreadPoolExecutor(max_workers=1)
        try:
            confirmed = executor.submit(connector.confirm_transaction, signature).result(
                timeout=self.confirm_timeout
            )
        except FutureTimeout as e:
            raise TradeError(f"Confirmation timed out after {self.confirm_timeout:g}s") from e
        except Exception as e:
            raise TradeError(f"Confirmation failed: {e}") from e
        finally:
            executor.shutdown(wait=False)

        if not confirmed:
            raise TradeError("Transaction failed")
        return signature
