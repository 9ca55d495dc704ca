from personalapi.dao.base.store_base_adapter import (
    Collection,
    StoreBaseAdapter,
    GUESTBOOK_COLLECTION,
    SHORTLINK_COLLECTION,
)


__all__ = [
    'Collection',
    'StoreBaseAdapter',
    'GUESTBOOK_COLLECTION',
    'SHORTLINK_COLLECTION',
]
