"""Alias generation utility

This module provides random alias candidates for new URL records and the
caller side of the collision-retry protocol.

The generator never consults the data store, so two calls may (rarely) return
the same candidate. Collisions surface as AliasExistsError from the DAO and
are retried with a fresh candidate by save_with_generated_alias().

Functions:
    generate_alias(length=6) -> str:
        Generate a random alias from the 52-letter alphabet.

    save_with_generated_alias(dao, url, length=6, max_attempts=10) -> URLRecordModel:
        Save a URL under a freshly generated alias, retrying on collisions.

Example:
    >>> from urlshortener.utils import generate_alias
    >>> generate_alias(6)
    'qZbRtK'
"""

import random
import string

from urlshortener.constants import AliasDefaults
from urlshortener.models import URLRecordModel
from urlshortener.dao.base import URLBaseDAO
from urlshortener.dao.exceptions import AliasExistsError, DataStoreError, InvalidArgumentError


ALPHABET = string.ascii_lowercase + string.ascii_uppercase  # 26 lowercase + 26 uppercase

_random = random.SystemRandom()


def generate_alias(length: int = AliasDefaults.LENGTH) -> str:
    """Generate a random alias candidate.

    Each character is drawn independently and uniformly from ALPHABET using
    the operating system's entropy source.

    Args:
        length (int, optional):
            Exact length of the alias. Defaults to 6.

    Returns:
        str: Random alias of exactly `length` characters.

    Raises:
        InvalidArgumentError:
            If length is not a positive integer.

    Example:
        >>> alias = generate_alias(8)
        >>> len(alias)
        8
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise InvalidArgumentError(f'Alias length must be of type integer (given type: {type(length)}).')
    if length <= 0:
        raise InvalidArgumentError(f'Alias length must be a positive integer (given value: {length}).')

    return ''.join(_random.choices(ALPHABET, k=length))


def save_with_generated_alias(
    dao: URLBaseDAO,
    url: str,
    length: int = AliasDefaults.LENGTH,
    max_attempts: int = AliasDefaults.MAX_ATTEMPTS,
) -> URLRecordModel:
    """Save a URL under a generated alias, retrying on alias collisions.

    Args:
        dao (URLBaseDAO):
            Data store to save the record in.
        url (str):
            Target URL, already validated by the caller.
        length (int, optional):
            Length of generated aliases. Defaults to 6.
        max_attempts (int, optional):
            Number of candidates to try before giving up. Defaults to 10.

    Returns:
        URLRecordModel: The saved record, including its id.

    Raises:
        InvalidArgumentError:
            If length or max_attempts is not positive.
        DataStoreError:
            If the data store fails, or every candidate collided. Running out of
            candidates at the default alphabet and length means something is
            wrong with the data store, so it is reported the same way.
    """
    if max_attempts <= 0:
        raise InvalidArgumentError(f'max_attempts must be a positive integer (given value: {max_attempts}).')

    last_collision: AliasExistsError | None = None
    for _ in range(max_attempts):
        alias = generate_alias(length)
        try:
            record_id = dao.save(url, alias)
        except AliasExistsError as e:
            last_collision = e
            continue
        return URLRecordModel(alias=alias, url=url, id=record_id)

    raise DataStoreError(f'Could not find a free alias after {max_attempts} attempts.') from last_collision
