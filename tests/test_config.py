import logging

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import OperationalError

from fintrack import database
from fintrack.config import Settings


@pytest.mark.parametrize("secret", [None, ""])
def test_settings_require_jwt_secret(secret):
    with pytest.raises(ValidationError):
        Settings(jwt_secret=secret)


def test_settings_accept_explicit_secret():
    assert Settings(jwt_secret="s3cret").jwt_secret == "s3cret"


class LockedEngine:
    def connect(self):
        raise OperationalError("PRAGMA journal_mode=WAL;", {}, Exception("database is locked"))


def test_locked_sqlite_pragmas_are_logged(caplog):
    with caplog.at_level(logging.WARNING, logger=database.logger.name):
        assert database.apply_sqlite_pragmas(LockedEngine()) is False
    assert "database is locked" in caplog.text


def test_sqlite_pragmas_applied(engine):
    assert database.apply_sqlite_pragmas(engine) is True
