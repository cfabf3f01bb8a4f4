"""
Database initialization script.
Creates the signals table for the durable store.
"""
from sqlalchemy import inspect
from solsignal.models.base import Base, build_engine
# CRITICAL: Import all models to register them
from solsignal.models.signals import SignalRecord  # noqa: F401
from config.settings import get_settings

def init_database():
    """
    Initialize database with all tables.
    Steps:
    1. Create all tables from SQLAlchemy models
    2. Verify
    """
    settings = get_settings()
    engine = build_engine(settings.DATABASE_URL)

    print("📡 SolSignal - Database Initialization")
    print("=" * 50)

    # Step 1: Create all tables
    print("\n1. Creating all tables...")
    try:
        Base.metadata.create_all(bind=engine)
        print("  ✓ All tables created")
    except Exception as e:
        print(f"  ✗ Error creating tables: {e}")
        raise SystemExit(1)

    # Step 2: Verify
    print("\n2. Verifying tables...")
    tables = inspect(engine).get_table_names()
    print(f"  ✓ Found {len(tables)} tables:")
    for table in tables:
        print(f"    - {table}")

    print("\n" + "=" * 50)
    print("✅ Database initialization complete!")
    print("\nNext steps:")
    print("1. Set SIGNAL_STORE=database")
    print(f"2. Start the API on http://{settings.API_HOST}:{settings.API_PORT}")

if __name__ == "__main__":
    init_database()
