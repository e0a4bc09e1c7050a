"""
Database Migrator Entry Point.

Applies the SQL files in migrations/ in name order, once each.
"""
import asyncio
import sys
from pathlib import Path

import asyncpg
from dotenv import load_dotenv

from config.settings import get_settings
from pkg.logger.logger import get_logger, setup_logging


# Load environment variables
load_dotenv()

logger = get_logger("migrator")

MIGRATIONS_DIR = Path(__file__).parent.parent.parent / "migrations"


async def get_applied_migrations(conn: asyncpg.Connection) -> set[str]:
    """
    Get list of already applied migrations.

    Args:
        conn: Database connection.

    Returns:
        Set of applied migration names.
    """
    await conn.execute("""
        CREATE TABLE IF NOT EXISTS _migrations (
            id SERIAL PRIMARY KEY,
            name VARCHAR(255) NOT NULL UNIQUE,
            applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """)

    rows = await conn.fetch("SELECT name FROM _migrations")
    return {row["name"] for row in rows}


def pending_migrations(migrations_dir: Path, applied: set[str]) -> list[Path]:
    """SQL files in migrations_dir not yet applied, in name order."""
    return [
        path for path in sorted(migrations_dir.glob("*.sql"))
        if path.name not in applied
    ]


async def apply_migration(conn: asyncpg.Connection, migration_path: Path) -> None:
    """
    Apply a single migration inside a transaction and record it.

    Args:
        conn: Database connection.
        migration_path: Path to migration SQL file.
    """
    logger.info("Applying migration", migration=migration_path.name)

    async with conn.transaction():
        await conn.execute(migration_path.read_text())
        await conn.execute(
            "INSERT INTO _migrations (name) VALUES ($1)",
            migration_path.name,
        )


async def run_migrations(database_url: str, migrations_dir: Path = MIGRATIONS_DIR) -> int:
    """
    Run all pending migrations.

    Returns:
        Number of migrations applied.
    """
    if not migrations_dir.exists():
        logger.error("Migrations directory not found", path=str(migrations_dir))
        return 0

    conn = await asyncpg.connect(database_url)
    try:
        applied = await get_applied_migrations(conn)
        pending = pending_migrations(migrations_dir, applied)

        if not pending:
            logger.info("All migrations already applied", applied=len(applied))
            return 0

        for migration_path in pending:
            await apply_migration(conn, migration_path)

        logger.info("Migrations applied", count=len(pending))
        return len(pending)
    finally:
        await conn.close()


async def rollback_migration(database_url: str, migration_name: str) -> bool:
    """
    Forget a migration so it is applied again on the next run.

    Only the tracking row is removed; schema changes must be reverted by hand.
    """
    conn = await asyncpg.connect(database_url)
    try:
        result = await conn.execute(
            "DELETE FROM _migrations WHERE name = $1",
            migration_name,
        )
    finally:
        await conn.close()

    removed = result == "DELETE 1"
    if removed:
        logger.info("Rolled back migration", migration=migration_name)
    else:
        logger.warning("Migration not found", migration=migration_name)
    return removed


def main() -> None:
    """Main entry point."""
    settings = get_settings()
    setup_logging(
        service="migrator",
        level=settings.log_level,
        json_format=settings.log_format == "json",
    )

    args = sys.argv[1:]
    if not args:
        asyncio.run(run_migrations(settings.database_url))
    elif args[0] == "rollback" and len(args) == 2:
        asyncio.run(rollback_migration(settings.database_url, args[1]))
    else:
        logger.error("Unknown command", argv=args)
        print("Usage:")
        print("  python cmd/migrator/main.py                    # Run all migrations")
        print("  python cmd/migrator/main.py rollback <name>    # Forget a migration")
        sys.exit(1)


if __name__ == "__main__":
    main()
