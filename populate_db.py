# populate_db.py

import json
import logging

import requests

from config import SETTINGS
from faraid.rules.heirs import catalog
from observability import setup_logging

logger = logging.getLogger(__name__)

# Heir catalogue endpoint
API_URL = f"{SETTINGS.api_url}/heirs/"

heirs_data = catalog()

def populate_database(api_url: str = API_URL) -> dict:
    """
    Post every heir type to the catalogue. Returns counters per outcome.
    """
    logger.info("seeding heir catalogue at %s", api_url)
    summary = {"created": 0, "skipped": 0, "failed": 0}
    for heir in heirs_data:
        try:
            response = requests.post(
                api_url,
                data=json.dumps(heir),
                headers={"Content-Type": "application/json"},
                timeout=10,
            )

            if response.status_code == 200:
                logger.info("created heir %s", heir["code"])
                summary["created"] += 1
            elif response.status_code == 400:
                # 400 means the code is already in the catalogue
                logger.info("heir %s already exists, skipped", heir["code"])
                summary["skipped"] += 1
            else:
                logger.error("failed to create %s: status=%s body=%s",
                             heir["code"], response.status_code, response.text)
                summary["failed"] += 1

        except requests.exceptions.ConnectionError as e:
            logger.error("cannot reach the API, is the uvicorn server running? %s", e)
            summary["failed"] += len(heirs_data) - summary["created"] - summary["skipped"] - summary["failed"]
            break
    logger.info("seeding finished: %s", summary)
    return summary

if __name__ == "__main__":
    setup_logging(SETTINGS.log_level)
    populate_database()
