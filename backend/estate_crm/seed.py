"""
Seed the configured store with the example CRM data.

Installed as the ``estate-crm-seed`` console script. Tables that already
hold rows are left untouched.
"""
import logging
import sys

from .config import ConfigurationError, Settings
from .store import CrmError, build_stores

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
def main() -> int:
    """Seed every empty table of the configured backend. Returns the exit code."""
    settings = Settings.from_env()
    logging.basicConfig(level=logging.INFO)
    try:
        stores = build_stores(settings)
    except ConfigurationError as e:
        logger.error(f"Cannot seed: {e}")
        return 1
    logging.getLogger().setLevel(settings.log_level)
    try:
        for resource, store in stores.all().items():
            inserted = store.ensure_seed()
            if not inserted:
                logger.info(f"{resource} already populated, skipping")
    except CrmError as e:
        logger.error(f"Seeding failed: {e}")
        return 1
    finally:
        stores.close()
    logger.info("Seeding complete")
    return 0


if __name__ == "__main__":
    sys.exit(main())
