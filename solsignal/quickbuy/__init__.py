"""Quick-buy pass-through to the Jupiter swap aggregator."""
from solsignal.quickbuy.jupiter import JupiterClient, Quote, QuoteRequest
from solsignal.quickbuy.debounce import QuoteDebouncer
from solsignal.quickbuy.remote import ApiQuoteClient
from solsignal.quickbuy.trade import QuickBuy, WalletConnector, is_valid_amount

__all__ = [
    "ApiQuoteClient",
    "JupiterClient",
    "Quote",
    "QuoteRequest",
    "QuoteDebouncer",
    "QuickBuy",
    "WalletConnector",
    "is_valid_amount",
]
