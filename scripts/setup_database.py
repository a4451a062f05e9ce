# scripts/setup_database.py
#!/usr/bin/env python
"""
Simple database setup script for a fresh database.
Creates all tables without going through alembic (local development).
"""
import sys
from pathlib import Path
sys.path.append(str(Path(__file__).parent.parent))

import logging

from app.core.config import Settings
from app.core.database import Base, Database
import app.db.models  # noqa: F401

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main():
    """Create all tables defined in app/db/models.py"""
    settings = Settings()
    database = Database(settings.database_url, timeout_seconds=settings.db_timeout_seconds)
    try:
        logger.info("Creating database tables...")
        Base.metadata.create_all(bind=database.engine)
        logger.info("\n✅ Database setup complete!")
        logger.info("You can now start the application with: uvicorn app.main:app --reload")
    except Exception as e:
        logger.error(f"❌ Error setting up database: {str(e)}")
        sys.exit(1)
    finally:
        database.dispose()


if __name__ == "__main__":
    main()
