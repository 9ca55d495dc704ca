from personalapi.models import GuestbookEntryModel
from personalapi.dao.base import GUESTBOOK_COLLECTION, StoreBaseAdapter
from personalapi.dao.entry_dao import EntryDAO


class GuestbookDAO(EntryDAO[GuestbookEntryModel]):
    """Entry DAO for the public guestbook.

    Entries submitted with `qa=True` are test submissions. They are stored and
    counted like any other entry, but hidden from listings unless requested.
    """

    def __init__(self, store: StoreBaseAdapter):
        super().__init__(store, GuestbookEntryModel, GUESTBOOK_COLLECTION)

    def list_undeleted(
        self,
        include_qa: bool = False,
        after: str | None = None,
    ) -> tuple[int, list[GuestbookEntryModel]]:
        predicate = None if include_qa else (lambda entry: not entry.qa)
        return super().list_undeleted(predicate=predicate, after=after)
