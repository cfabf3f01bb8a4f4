"""Signal database model."""
from sqlalchemy import Column, String, Float, Integer, BigInteger, Boolean, Text, JSON, TIMESTAMP
from sqlalchemy.sql import func
from solsignal.models.base import Base

class SignalRecord(Base):
    """
    Token trading signals posted by producers.

    Column names are the snake_case counterparts in ``FIELD_MAP``.
    Rows are never updated after insert.
    """
    __tablename__ = 'signals'

    # Identity
    id = Column(String(64), primary_key=True)
    timestamp = Column(BigInteger, nullable=False, index=True)  # ms since epoch

    # Core signal
    token_symbol = Column(String(32), index=True)
    token_address = Column(String(64), index=True)
    wallet_address = Column(String(64), index=True)
    win_percentage = Column(Float)
    buy_size = Column(Float)
    entry_market_cap = Column(Float)
    current_roi = Column(Float)

    # Token details
    token_name = Column(String(255))
    token_image = Column(Text)
    has_image = Column(Boolean)
    market_cap = Column(Float)
    fdv = Column(Float)
    price_usd = Column(Float)
    volume_24h = Column(Float)
    percent_change_1h = Column(JSON)  # text or number, as sent
    buys_24h = Column(JSON)
    sells_24h = Column(JSON)
    liquidity_amount = Column(Float)
    liquidity_ratio = Column(JSON)
    age = Column(JSON)
    total_holders = Column(Integer)

    # Risk
    risk_level = Column(String(10))
    fresh_wallet_percentage = Column(Float)
    fresh_wallets_1d = Column(JSON)
    fresh_wallets_7d = Column(JSON)
    lp_percentage = Column(Float)

    # Links
    twitter_url = Column(Text)
    website_url = Column(Text)
    dexscreener_url = Column(Text)
    defined_url = Column(Text)

    # Classification
    signal_type = Column(String(10), index=True)
    alert_type = Column(String(64))
    source = Column(String(64), index=True)

    # Provider-specific analysis blobs
    analysis = Column(JSON)

    # Audit
    created_at = Column(TIMESTAMP, nullable=False, server_default=func.now())
