from personalapi.dao.entry_dao import EntryDAO
from personalapi.dao.guestbook_dao import GuestbookDAO
from personalapi.dao.shortlink_dao import ShortlinkDAO
from personalapi.dao.factory import store_from_config


__all__ = [
    'EntryDAO',
    'GuestbookDAO',
    'ShortlinkDAO',
    'store_from_config',
]
