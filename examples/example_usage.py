"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the attendance rules live in the services.
"""

import importlib

from config import get_settings_module

from src.gym_checkin.gym_checkin.container import build_container
from src.gym_checkin.gym_checkin.logs.model import ReconciliationFilter
from src.gym_checkin.gym_checkin.core.enums import StatusFilter


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=settings)
    for item in container.log_service.report(ReconciliationFilter(status=StatusFilter.MISSED))[:1]:
        for row in item.rows:
            print(row.athlete_name, row.activity_name, row.status.value)


if __name__ == "__main__":
    main()
