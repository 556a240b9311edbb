"""Unit tests for RedisKeySchema

Test coverage includes:

1. Key generation with and without prefix
2. Prefix validation
"""

import pytest

from urlshortener.dao.redis import RedisKeySchema


# -------------------------------
# 1. Key generation
# -------------------------------


def test_link_key_with_prefix():
    keys = RedisKeySchema(prefix='urlshortener:test')
    assert keys.link_key('aBcDeF') == 'urlshortener:test:links:aBcDeF'


def test_link_key_without_prefix():
    keys = RedisKeySchema()
    assert keys.link_key('aBcDeF') == 'links:aBcDeF'


def test_link_key_is_case_sensitive():
    keys = RedisKeySchema()
    assert keys.link_key('abc') != keys.link_key('ABC')


@pytest.mark.parametrize(
    'prefix, expected',
    [
        (None, 'links:counter'),
        ('urlshortener:prod', 'urlshortener:prod:links:counter'),
    ],
)
def test_counter_key(prefix, expected):
    assert RedisKeySchema(prefix=prefix).counter_key() == expected


# -------------------------------
# 2. Prefix validation
# -------------------------------


@pytest.mark.parametrize('prefix', [123, 4.5, ['app'], {'app': 'env'}])
def test_invalid_prefix_type_raises_type_error(prefix):
    with pytest.raises(TypeError, match='Prefix must be of type string'):
        RedisKeySchema(prefix=prefix)
