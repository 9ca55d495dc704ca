# Log event codes (also used as `errorCode` in error responses)
MISSING_ENTRY_ID = 'MISSING_ENTRY_ID'
GUESTBOOK_ENTRY_CREATED = 'GUESTBOOK_ENTRY_CREATED'
GUESTBOOK_ENTRY_DELETED = 'GUESTBOOK_ENTRY_DELETED'
GUESTBOOK_ENTRIES_LISTED = 'GUESTBOOK_ENTRIES_LISTED'
