"""
Seed Plans Script
Creates the tenancy tables if missing and inserts the plan catalog from
config/plans_config.py. Existing plans are left as they are.
Can be run manually or as part of a deploy step.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from pos_backend.database.session import Database, init_db
from pos_backend.modules.plans.service import seed_plan_catalog
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main():
    """Create tables and seed the plan catalog"""
    try:
        logger.info("Creating tenancy tables...")
        init_db()

        session = Database.get_session_factory()()
        try:
            created = seed_plan_catalog(session)
        finally:
            session.close()

        logger.info(f"Seeding completed successfully! {created} plan(s) created")
    except Exception as e:
        logger.error(f"Error during seeding: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
