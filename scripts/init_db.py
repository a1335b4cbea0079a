import asyncio
import sys
from pathlib import Path

# Add parent directory to path
sys.path.append(str(Path(__file__).parent.parent))

from yardview.core.database import engine, AsyncSessionLocal, create_tables, drop_tables
from yardview.services.block_config_service import BlockConfigService


async def init_db():
    """Initialize database - create tables and default blocks"""
    print("Creating database tables...")
    await create_tables()

    async with AsyncSessionLocal() as session:
        created = await BlockConfigService(session).seed_defaults()
        print(f"Default blocks created: {created}")

    await engine.dispose()
    print("Database initialized successfully!")


async def drop_db():
    """Drop all tables - use with caution!"""
    print("Dropping all tables...")
    await drop_tables()
    await engine.dispose()
    print("All tables dropped!")


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "drop":
        asyncio.run(drop_db())
    else:
        asyncio.run(init_db())
