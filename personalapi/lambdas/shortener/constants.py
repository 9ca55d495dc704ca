# Log event codes (also used as `errorCode` in error responses)
MISSING_SHORTNAME = 'MISSING_SHORTNAME'
INVALID_STATS_PAYLOAD = 'INVALID_STATS_PAYLOAD'
SHORTLINK_CREATED = 'SHORTLINK_CREATED'
SHORTLINK_DELETED = 'SHORTLINK_DELETED'
SHORTLINK_STATS_UPDATED = 'SHORTLINK_STATS_UPDATED'
