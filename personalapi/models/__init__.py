from personalapi.models.entry_models import EntryModel, GuestbookEntryModel, ShortlinkEntryModel


__all__ = [
    'EntryModel',
    'GuestbookEntryModel',
    'ShortlinkEntryModel',
]
