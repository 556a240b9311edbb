from dataclasses import dataclass


@dataclass(frozen=True)
class URLRecordModel:
    """Represent a persisted alias to URL mapping.

    Attributes:
        alias (str):
            Unique, case-sensitive short key the record is looked up by.
        url (str):
            The original long URL the alias redirects to.
        id (int | None):
            Surrogate key assigned by the data store on creation. Strictly
            increasing in creation order and never reused. None until the
            record has been saved.

    Example:
        >>> record = URLRecordModel(alias='aBcDeF', url='https://example.com/article/123', id=7)
        >>> record.alias
        'aBcDeF'
        >>> record.url
        'https://example.com/article/123'
        >>> record.id
        7
    """

    alias: str
    url: str
    id: int | None = None
