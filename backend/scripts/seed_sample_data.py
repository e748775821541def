"""
Load the demo GIP and TUPAD applicants into an empty store
"""
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from app.applicants.repository import StorageConfig, build_repository
from app.applicants.seed import seed_sample_data
from app.applicants.service import ApplicantService
from app.core.config import settings
from app.core.logging_config import configure_logging
import structlog

logger = structlog.get_logger()


async def run():
    repository = build_repository(StorageConfig.from_settings(settings))
    try:
        await repository.initialize()
        service = ApplicantService(repository, code_retries=settings.CODE_RESERVATION_RETRIES)
        return await seed_sample_data(service)
    finally:
        await repository.close()


def main():
    """Main function"""
    configure_logging()
    created = asyncio.run(run())
    logger.info("sample_data_seeded", created=created)


if __name__ == "__main__":
    main()
