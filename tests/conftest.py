import os
import sys

import pytest

# Ensure project root is on path
ROOT = os.path.dirname(os.path.dirname(__file__))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from storage.db import Database  # noqa: E402
from storage.repos import AppStateRepo, BookmarkRepo, SettingsRepo  # noqa: E402


@pytest.fixture()
def db():
    database = Database(":memory:")
    database.init_schema()
    try:
        yield database
    finally:
        database.close()


@pytest.fixture()
def state_repo(db):
    return AppStateRepo(db)


@pytest.fixture()
def settings_repo(state_repo):
    return SettingsRepo(state_repo)


@pytest.fixture()
def bookmark_repo(state_repo):
    return BookmarkRepo(state_repo)


@pytest.fixture()
def offline_state(tmp_path):
    # parent directory does not exist -> sqlite cannot open the file
    database = Database(str(tmp_path / "missing" / "app.db"))
    return AppStateRepo(database)
