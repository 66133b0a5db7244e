# server/tests/support.py

import shutil
import tempfile

from config import Settings
from database import init_db


TEST_SECRET = "test-secret"

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def make_settings(upload_dir: str, **overrides) -> Settings:
    values = {
        "database_url": "sqlite://",
        "jwt_secret": TEST_SECRET,
        "upload_dir": upload_dir,
        "log_level": "WARNING",
    }
    values.update(overrides)
    return Settings(**values)


def make_session():
    return init_db("sqlite://")()


class TempDirMixin:
    def make_temp_dir(self) -> str:
        path = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, path, ignore_errors=True)
        return path
