"""
Database Setup Script
Validates configuration and creates the database tables
"""

import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

# Add project root to path
ROOT_DIR = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT_DIR))

dotenv_path = ROOT_DIR / ".env"
if dotenv_path.exists():
    load_dotenv(dotenv_path)

from vidshare.app.config import get_config, validate_config, setup_logging  # noqa: E402
from vidshare.app.database import db_manager  # noqa: E402


async def _setup(reset: bool) -> None:
    try:
        print("\n🔌 Testing database connection...")
        await db_manager.ping()
        print("✅ Database connection successful")

        if reset:
            print("\n🗑️  Dropping existing tables...")
            await db_manager.drop_tables()

        print("\n📊 Creating database tables...")
        await db_manager.create_tables()
    finally:
        await db_manager.close()


def main():
    """Initialize database and validate configuration"""
    print("=" * 60)
    print("🔧 vidshare - Database Setup")
    print("=" * 60)

    setup_logging()

    print("\n🔍 Validating Configuration...")
    validation = validate_config()

    if not validation["valid"]:
        print("\n❌ Configuration validation failed:")
        for error in validation["errors"]:
            print(f"  - {error}")
        sys.exit(1)

    for warning in validation["warnings"]:
        print(f"  ⚠️  {warning}")

    print(f"\n📦 Using database: {get_config().database.url}")

    try:
        asyncio.run(_setup(reset="--reset" in sys.argv))
    except Exception as e:
        print(f"\n❌ Database setup failed: {e}")
        sys.exit(1)

    print("\n" + "=" * 60)
    print("✅ Database setup complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
