from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.church_admin.church_admin.database.bootstrap import apply_seed_sql, ensure_admin_user
from src.church_admin.church_admin.database.connection import DBConfig, describe


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed modules, chart of accounts and the admin login.")
    parser.add_argument("--admin-email", default=None)
    parser.add_argument("--admin-password", default=None)
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")

    email = args.admin_email or getattr(settings, "ADMIN_EMAIL", None)
    password = args.admin_password or getattr(settings, "ADMIN_PASSWORD", None)
    if email and password:
        ensure_admin_user(db_config, email=email, password=password)
        print(f"OK: admin login ready ({email})")

    print(f"OK: Seeded database -> {describe(DBConfig.from_dict(db_config))}")


if __name__ == "__main__":
    main()
