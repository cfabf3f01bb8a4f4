"""Shared fixtures."""
import os

os.environ.setdefault("SIGNAL_STORE", "memory")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from solsignal.api.main import app
from solsignal.models.base import Base, build_engine
from solsignal.services import SignalService, get_signal_service
from solsignal.store import DatabaseSignalStore, MemorySignalStore, get_signal_store


@pytest.fixture
def memory_store():
    return MemorySignalStore(max_signals=100)


@pytest.fixture
def db_store():
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    store = DatabaseSignalStore(sessionmaker(autocommit=False, autoflush=False, bind=engine))
    yield store
    engine.dispose()


@pytest.fixture
def service(memory_store):
    return SignalService(memory_store)


@pytest.fixture
def client(service):
    app.dependency_overrides[get_signal_service] = lambda: service
    app.dependency_overrides[get_signal_store] = lambda: service.store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def full_signal():
    """A signal carrying every documented external field."""
    return {
        "id": "sig-0001",
        "timestamp": 1754321968000,
        "tokenSymbol": "BONK",
        "tokenAddress": "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263",
        "walletAddress": "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU",
        "winPercentage": 87.5,
        "buySize": 2.5,
        "entryMarketCap": 150000.0,
        "currentROI": -12.5,
        "tokenName": "Bonk",
        "tokenImage": "iVBORw0KGgoAAAANSUhEUgAAAAEAAAAB",
        "hasImage": True,
        "marketCap": 1250000.0,
        "fdv": 1300000.0,
        "priceUSD": 0.000023,
        "volume24h": 540000.0,
        "percentChange1h": "12.4",
        "buys24h": "1432",
        "sells24h": "987",
        "liquidityAmount": 85000.0,
        "liquidityRatio": "6.8%",
        "age": "2h",
        "totalHolders": 1543,
        "riskLevel": "MEDIUM",
        "freshWalletPercentage": 18.5,
        "freshWallets1d": "12%",
        "freshWallets7d": "25%",
        "lpPercentage": 92.0,
        "twitterUrl": "https://twitter.com/bonk_inu",
        "websiteUrl": "https://bonkcoin.com",
        "dexscreenerUrl": "https://dexscreener.com/solana/dezxaz8z7pnrnrjjz3wxborgixca6xjnb7yab1ppb263",
        "definedUrl": "https://www.defined.fi/sol/DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263",
        "signalType": "buy",
        "alertType": "smart_wallet_buy",
        "source": "wallet-tracker",
        "analysis": {"rugcheck": {"score": 420, "risks": ["mutable metadata"]}},
    }
