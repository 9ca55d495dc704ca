"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    EntryNotFoundError:
        Raised when no item is stored under the requested key.

    EntryAlreadyExistsError:
        Raised when a conditional create finds an item (live or tombstoned)
        already stored under the same key.

    DataStoreError:
        Raised when the backing store is unavailable or rejects a request
        (connection issues, timeouts, throttling, read-only replicas, ...). Safe
        for the caller to retry; the DAOs never retry on their own.

Example:
    >>> from personalapi.dao.exceptions import EntryNotFoundError
    >>> raise EntryNotFoundError("Entry 'abc' not found in collection 'shortener'.")
    Traceback (most recent call last):
        ...
    personalapi.dao.exceptions.EntryNotFoundError: Entry 'abc' not found in collection 'shortener'.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class EntryNotFoundError(DAOError):
    """Exception raised when no item is stored under the requested key."""

    pass


class EntryAlreadyExistsError(DAOError):
    """Exception raised when attempting to create an entry whose key is already taken."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, throttling, etc.
    """

    pass
