"""
Create the applicant tables for the configured database
"""
import asyncio
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.applicants.repository import StorageConfig, build_repository
from app.core.config import settings
from app.core.logging_config import configure_logging
import structlog

logger = structlog.get_logger()


async def init_storage():
    repository = build_repository(StorageConfig.from_settings(settings))
    try:
        await repository.initialize()
    finally:
        await repository.close()


def main():
    """Main initialization function"""
    configure_logging()
    logger.info("initializing_database", url=settings.DATABASE_URL)
    asyncio.run(init_storage())
    logger.info("database_initialization_complete")


if __name__ == "__main__":
    main()
