"""Example: use the service layer directly (no Flask).

Prints the salary slip preview of worker 1 for January 2025 (months are 0-based).
"""

import importlib
import json

from config import get_settings_module

from src.wash_payroll.wash_payroll.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, business_timezone=settings.BUSINESS_TIMEZONE)
    slip = container.slip_service.get_slip(worker_id=1, month=0, year=2025)
    print(json.dumps(slip.to_dict(), indent=2))


if __name__ == "__main__":
    main()
