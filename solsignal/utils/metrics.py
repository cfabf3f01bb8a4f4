"""Prometheus metrics exporters."""
from prometheus_client import Counter, Gauge, Histogram, CollectorRegistry

# Create registry
registry = CollectorRegistry()

# ========== SIGNAL METRICS ==========
signals_created = Counter(
    'signals_created_total',
    'Total number of signals ingested',
    ['source', 'signal_type'],
    registry=registry
)

signals_rejected = Counter(
    'signals_rejected_total',
    'Total number of signal payloads rejected',
    ['reason'],
    registry=registry
)

signals_stored = Gauge(
    'signals_stored',
    'Number of signals currently held by the store',
    registry=registry
)

signals_pruned = Counter(
    'signals_pruned_total',
    'Total number of signals removed by store maintenance',
    registry=registry
)

# ========== QUOTE METRICS ==========
quote_requests = Counter(
    'quote_requests_total',
    'Total number of aggregator quote requests',
    ['outcome'],
    registry=registry
)

quote_latency = Histogram(
    'quote_latency_seconds',
    'Aggregator quote latency in seconds',
    registry=registry
)

trades_executed = Counter(
    'trades_executed_total',
    'Total number of quick-buy trades',
    ['status'],
    registry=registry
)

# ========== HELPER FUNCTIONS ==========
def record_signal_created(source: str, signal_type: str, total: int):
    """Record a new signal and the resulting store size."""
    signals_created.labels(source=source or 'unknown', signal_type=signal_type or 'unknown').inc()
    signals_stored.set(total)

def record_signal_rejected(reason: str):
    """Record a rejected ingestion request."""
    signals_rejected.labels(reason=reason).inc()

def record_signals_pruned(count: int):
    """Record rows removed by a prune run."""
    signals_pruned.inc(count)

def record_quote(outcome: str, seconds: float):
    """Record a quote request outcome and latency."""
    quote_requests.labels(outcome=outcome).inc()
    quote_latency.observe(seconds)

def record_trade(status: str):
    """Record a trade outcome."""
    trades_executed.labels(status=status).inc()
