import pytest

from urlshortener.dao.sql import URLSQLDAO


@pytest.fixture
def app_prefix() -> str:
    return 'testapp:test'


@pytest.fixture
def sql_url(tmp_path) -> str:
    return f'sqlite:///{tmp_path / "urls.db"}'


@pytest.fixture
def sql_dao(sql_url: str, app_prefix: str):
    dao = URLSQLDAO(sql_url=sql_url, sql_timeout=5.0, prefix=app_prefix)
    yield dao
    dao.engine.dispose()
