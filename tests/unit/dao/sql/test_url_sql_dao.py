"""Unit tests for the URLSQLDAO, run against a throwaway SQLite database

Test coverage includes:

1. Schema
   - Table naming from the app prefix.
   - Unique constraint and alias index are created.
   - Creating the DAO twice on the same database is harmless.

2. Save behavior
   - Round-trip of saved records.
   - Ids strictly increase and are never reused, even after deletes.
   - A taken alias raises AliasExistsError and keeps the first record.
   - Concurrent saves of one alias have exactly one winner.
   - Empty and ill-typed arguments are rejected.

3. Retrieval behavior
   - Exact, case-sensitive lookups.
   - Missing aliases raise AliasNotFoundError.

4. Delete behavior
   - Deleting is idempotent.
   - A deleted alias can be saved again.

5. Data store failures and write error classification
"""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from beartype.roar import BeartypeCallHintParamViolation
from sqlalchemy import inspect, text
from sqlalchemy.exc import IntegrityError, OperationalError

from urlshortener.models import URLRecordModel
from urlshortener.dao.base import URLBaseDAO
from urlshortener.dao.exceptions import (
    AliasExistsError,
    AliasNotFoundError,
    DataStoreError,
    ErrorKind,
    InvalidArgumentError,
)
from urlshortener.dao.sql import URLSQLDAO


class TestURLSQLDAO:
    dao: URLSQLDAO

    @pytest.fixture(autouse=True)
    def setup(self, sql_dao: URLSQLDAO):
        self.dao = sql_dao

    def test_implements_url_base_dao(self):
        assert isinstance(self.dao, URLBaseDAO)

    # -------------------------------
    # 1. Schema
    # -------------------------------

    def test_table_name_uses_prefix(self):
        assert self.dao.table.name == 'testapp_test_urls'

    def test_table_name_without_prefix(self, sql_url):
        dao = URLSQLDAO(sql_url=sql_url)

        assert dao.table.name == 'urls'
        assert 'urls' in inspect(dao.engine).get_table_names()
        dao.engine.dispose()

    def test_schema_has_unique_alias_and_index(self):
        inspector = inspect(self.dao.engine)

        indexes = {index['name']: index['column_names'] for index in inspector.get_indexes('testapp_test_urls')}
        unique_constraints = [constraint['column_names'] for constraint in inspector.get_unique_constraints('testapp_test_urls')]

        assert indexes['idx_testapp_test_urls_alias'] == ['alias']
        assert ['alias'] in unique_constraints

    def test_schema_creation_is_idempotent(self, sql_url, app_prefix):
        self.dao.save('https://example.com/kept', 'kept')

        second = URLSQLDAO(sql_url=sql_url, prefix=app_prefix)

        assert second.resolve('kept') == 'https://example.com/kept'
        second.engine.dispose()

    def test_initialize_with_engine(self, app_prefix):
        dao = URLSQLDAO(sql_engine=self.dao.engine, prefix=app_prefix)

        assert dao.engine is self.dao.engine

    # -------------------------------
    # 2. Save behavior
    # -------------------------------

    def test_save_and_get(self):
        record_id = self.dao.save('https://example.com/page', 'aBcDeF')

        assert record_id == 1
        assert self.dao.get('aBcDeF') == URLRecordModel(alias='aBcDeF', url='https://example.com/page', id=1)

    def test_save_and_resolve_many(self):
        records = {f'alias{i}': f'https://example.com/{i}' for i in range(5)}
        for alias, url in records.items():
            self.dao.save(url, alias)

        for alias, url in records.items():
            assert self.dao.resolve(alias) == url

    def test_save_returns_strictly_increasing_ids(self):
        ids = [self.dao.save('https://example.com', alias) for alias in ('a', 'b', 'c', 'd')]

        assert ids == sorted(ids)
        assert len(set(ids)) == len(ids)

    def test_ids_are_not_reused_after_deleting_newest_record(self):
        first = self.dao.save('https://example.com/1', 'first')
        newest = self.dao.save('https://example.com/2', 'newest')
        self.dao.delete('newest')

        after_delete = self.dao.save('https://example.com/3', 'after-delete')

        assert first < newest < after_delete

    def test_save_same_url_under_different_aliases(self):
        first = self.dao.save('https://example.com/same', 'one')
        second = self.dao.save('https://example.com/same', 'two')

        assert first != second
        assert self.dao.resolve('one') == self.dao.resolve('two') == 'https://example.com/same'

    def test_save_alias_which_already_exists(self):
        self.dao.save('https://example.com/first', 'taken')

        with pytest.raises(AliasExistsError, match="Alias 'taken' already exists.") as exc_info:
            self.dao.save('https://example.com/second', 'taken')

        assert exc_info.value.kind is ErrorKind.ALIAS_EXISTS
        assert isinstance(exc_info.value.__cause__, IntegrityError)
        assert self.dao.resolve('taken') == 'https://example.com/first'

    def test_save_aliases_differing_only_in_case(self):
        self.dao.save('https://example.com/lower', 'abc')
        self.dao.save('https://example.com/upper', 'ABC')

        assert self.dao.resolve('abc') == 'https://example.com/lower'
        assert self.dao.resolve('ABC') == 'https://example.com/upper'

    def test_concurrent_saves_of_same_alias_have_one_winner(self):
        workers = 8
        barrier = threading.Barrier(workers)

        def save(i: int):
            barrier.wait()
            try:
                return i, self.dao.save(f'https://example.com/{i}', 'contested')
            except AliasExistsError as e:
                return i, e

        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = list(executor.map(save, range(workers)))

        winners = [(i, result) for i, result in results if isinstance(result, int)]
        losers = [result for _, result in results if isinstance(result, AliasExistsError)]
        assert len(winners) == 1
        assert len(losers) == workers - 1

        [(winner, winner_id)] = winners
        assert self.dao.get('contested') == URLRecordModel(alias='contested', url=f'https://example.com/{winner}', id=winner_id)

    @pytest.mark.parametrize(
        'url, alias, field',
        [
            ('https://example.com', '', 'alias'),
            ('', 'abc123', 'url'),
            ('', '', 'url, alias'),
        ],
    )
    def test_save_with_empty_arguments(self, url, alias, field):
        with pytest.raises(InvalidArgumentError, match=f'Expected non-empty value for: {field}.') as exc_info:
            self.dao.save(url, alias)

        assert exc_info.value.kind is ErrorKind.INVALID_ARGUMENT

    def test_save_with_invalid_type(self):
        with pytest.raises(BeartypeCallHintParamViolation):
            self.dao.save('https://example.com', None)

    # -------------------------------
    # 3. Retrieval behavior
    # -------------------------------

    @pytest.mark.parametrize('method', ['get', 'resolve'])
    def test_lookup_alias_which_does_not_exist(self, method):
        with pytest.raises(AliasNotFoundError, match="Alias 'never-created' not found.") as exc_info:
            getattr(self.dao, method)('never-created')

        assert exc_info.value.kind is ErrorKind.NOT_FOUND

    def test_resolve_is_case_sensitive(self):
        self.dao.save('https://example.com', 'aBcDeF')

        with pytest.raises(AliasNotFoundError):
            self.dao.resolve('abcdef')

    def test_resolve_with_invalid_type(self):
        with pytest.raises(BeartypeCallHintParamViolation):
            self.dao.resolve(123)

    # -------------------------------
    # 4. Delete behavior
    # -------------------------------

    def test_delete(self):
        self.dao.save('https://example.com', 'gone')

        assert self.dao.delete('gone') is True
        with pytest.raises(AliasNotFoundError):
            self.dao.resolve('gone')

    def test_delete_absent_alias_is_a_no_op(self):
        """Deleting an alias that doesn't exist succeeds instead of raising AliasNotFoundError."""
        assert self.dao.delete('never-created') is False

    def test_delete_twice(self):
        self.dao.save('https://example.com', 'twice')

        assert self.dao.delete('twice') is True
        assert self.dao.delete('twice') is False

    def test_delete_leaves_other_records(self):
        self.dao.save('https://example.com/1', 'one')
        self.dao.save('https://example.com/2', 'two')

        self.dao.delete('one')

        assert self.dao.resolve('two') == 'https://example.com/2'

    def test_save_deleted_alias_again(self):
        first = self.dao.save('https://example.com/old', 'reused')
        self.dao.delete('reused')

        second = self.dao.save('https://example.com/new', 'reused')

        assert second > first
        assert self.dao.resolve('reused') == 'https://example.com/new'

    # -------------------------------
    # 5. Data store failures and write error classification
    # -------------------------------

    @pytest.fixture
    def dropped_table(self):
        with self.dao.engine.begin() as conn:
            conn.execute(text(f'DROP TABLE {self.dao.table.name}'))

    @pytest.mark.usefixtures('dropped_table')
    @pytest.mark.parametrize(
        'operation',
        [
            lambda dao: dao.save('https://example.com', 'abc123'),
            lambda dao: dao.get('abc123'),
            lambda dao: dao.resolve('abc123'),
            lambda dao: dao.delete('abc123'),
        ],
        ids=['save', 'get', 'resolve', 'delete'],
    )
    def test_operations_with_broken_data_store(self, operation):
        with pytest.raises(DataStoreError, match='Database operation failed at sqlite:///.*: OperationalError.') as exc_info:
            operation(self.dao)

        assert isinstance(exc_info.value.__cause__, OperationalError)
        assert exc_info.value.kind is ErrorKind.STORE_UNAVAILABLE

    def test_classify_unique_violation(self):
        self.dao.save('https://example.com', 'taken')
        with pytest.raises(IntegrityError) as exc_info:
            with self.dao.engine.begin() as conn:
                conn.execute(self.dao.table.insert().values(alias='taken', url='https://example.com/other'))

        assert isinstance(self.dao.classify_write_error(exc_info.value), AliasExistsError)

    def test_classify_not_null_violation(self):
        with pytest.raises(IntegrityError) as exc_info:
            with self.dao.engine.begin() as conn:
                conn.execute(self.dao.table.insert().values(alias='no-url', url=None))

        assert isinstance(self.dao.classify_write_error(exc_info.value), DataStoreError)

    def test_classify_unknown_error(self):
        classified = self.dao.classify_write_error(RuntimeError('boom'))

        assert isinstance(classified, DataStoreError)
        assert str(classified) == 'Database write failed: boom'
