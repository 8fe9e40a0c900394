"""Seed demo workers and the default salary settings.

Pass `--reset-settings` to store a fresh defaults version even when settings
already exist.
"""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.wash_payroll.wash_payroll.common.logging_utils import configure_logging
from src.wash_payroll.wash_payroll.container import build_container
from src.wash_payroll.wash_payroll.core.constants import SYSTEM_USER
from src.wash_payroll.wash_payroll.database.bootstrap import apply_seed_sql


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--reset-settings", action="store_true", help="store defaults as a new active version")
    parser.add_argument("--skip-workers", action="store_true", help="only seed salary settings")
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    if not args.skip_workers:
        apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")

    container = build_container(db_config=db_config)
    if args.reset_settings:
        current = container.settings_service.reset_to_defaults(modified_by=SYSTEM_USER)
    else:
        current = container.settings_service.get_settings()

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(salary settings version={current.version})"
    )


if __name__ == "__main__":
    main()
