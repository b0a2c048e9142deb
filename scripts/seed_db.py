from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.campus_od.campus_od.container import build_container
from src.campus_od.campus_od.database.demo_data import DEMO_PASSWORD, seed_demo


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    container = build_container(secret_key=settings.SECRET_KEY, storage_backend="mysql", db_config=db_config)
    seed_demo(container.users_repo, container.events_repo, container.od_requests_repo)

    print(
        "OK: Seeded demo data -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(password for every demo account: {DEMO_PASSWORD})"
    )


if __name__ == "__main__":
    main()
