# scripts/repair_onboarding_flags.py
#!/usr/bin/env python
"""
Mark profiles as onboarded when their questionnaire answers are saved
but `onboarding_completed` is still false.

    python scripts/repair_onboarding_flags.py
"""
import sys
from pathlib import Path
sys.path.append(str(Path(__file__).parent.parent))

import logging

from app.core.config import Settings
from app.core.database import Database
from app.core.exceptions import StoreError
from app.services.onboarding_service import repair_onboarding_flags

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main() -> int:
    settings = Settings()
    database = Database(settings.database_url, timeout_seconds=settings.db_timeout_seconds)
    try:
        with database.session() as db:
            repaired = repair_onboarding_flags(db)
        logger.info(f"Done: {repaired} profile(s) repaired")
        return 0
    except StoreError as e:
        logger.error(f"❌ {e.error}: {e.details}")
        return 1
    finally:
        database.dispose()


if __name__ == "__main__":
    sys.exit(main())
