"""Initialize the Watch Server database schema.

Creates every table defined in the SQLAlchemy models.

Usage:
    python -m watch_server.scripts.init_database
    python -m watch_server.scripts.init_database --drop   # Drop and recreate
    python -m watch_server.scripts.init_database --check  # Connection and tables only
"""

import argparse
import sys

from sqlalchemy import Engine, inspect

from watch_server.database import DatabaseConnection, get_database
from watch_server.database.models import Base
from watch_server.settings import settings


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        description="Initialize Watch Server database schema",
    )
    parser.add_argument(
        "--drop",
        action="store_true",
        help="Drop existing tables before creating",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only check connection, don't modify schema",
    )
    return parser.parse_args(argv)


def drop_tables(engine: Engine) -> None:
    """Drop all model tables."""
    print("🗑️  Dropping existing tables...")
    Base.metadata.drop_all(bind=engine)
    print("✅ Tables dropped")


def create_tables(engine: Engine) -> None:
    """Create all tables from SQLAlchemy models."""
    print("📋 Creating tables...")
    Base.metadata.create_all(bind=engine)
    print("✅ Tables created")


def missing_tables(engine: Engine) -> list[str]:
    """List model tables absent from the database.

    Args:
        engine: Engine to inspect.

    Returns:
        Sorted table names.
    """
    existing = set(inspect(engine).get_table_names())
    return sorted(set(Base.metadata.tables) - existing)


def print_table_summary(engine: Engine) -> None:
    """Print which model tables exist."""
    tables = sorted(inspect(engine).get_table_names())
    print("\n📊 Database Tables:")
    print("-" * 40)
    for table in tables:
        print(f"   • {table}")
    print("-" * 40)
    missing = missing_tables(engine)
    if missing:
        print(f"   Missing: {', '.join(missing)}")
    print(f"   Total: {len(tables)} tables")


def _print_banner() -> None:
    """Print the banner with database connection info."""
    print("=" * 50)
    print("🎬 Watch Server Database Initialization")
    print("=" * 50)
    if settings.database.url:
        print("   URL: from DATABASE_URL")
    else:
        print(f"   Host: {settings.database.host}")
        print(f"   Port: {settings.database.port}")
        print(f"   Database: {settings.database.name}")
    print("=" * 50)


def run(db: DatabaseConnection, args: argparse.Namespace) -> int:
    """Perform the requested schema operations.

    Args:
        db: DatabaseConnection instance.
        args: Parsed command line arguments.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    if not db.check_connection():
        print("❌ Cannot connect to database")
        return 1
    print("✅ Database connection successful")

    if args.check:
        print_table_summary(db.sync_engine)
        return 1 if missing_tables(db.sync_engine) else 0

    if args.drop:
        drop_tables(db.sync_engine)
    create_tables(db.sync_engine)

    print_table_summary(db.sync_engine)
    print("\n✅ Database initialization complete!")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    args = parse_args(argv)
    _print_banner()
    return run(get_database(), args)


if __name__ == "__main__":
    sys.exit(main())
