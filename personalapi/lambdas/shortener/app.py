"""Link shortener API handlers

Routes:
    GET  /shortener/entries                     -> list_entries_handler
    GET  /shortener/entries/{shortname}         -> get_entry_handler (admin)
    POST /shortener/entries                     -> create_entry_handler (admin)
    POST /shortener/entries/{shortname}/delete  -> delete_entry_handler (admin)
    POST /shortener/stats                       -> update_stats_handler (admin)
"""

import logging

from personalapi.types import LambdaEvent, LambdaContext, LambdaResponse
from personalapi.constants import (
    INVALID_JSON_BODY,
    VALIDATION_FAILED,
    UNAUTHORIZED,
    ENTRY_NOT_FOUND,
    ENTRY_ALREADY_EXISTS,
)
from personalapi.exceptions import ValidationError
from personalapi.models import ShortlinkEntryModel
from personalapi.dao import ShortlinkDAO, store_from_config
from personalapi.dao.exceptions import EntryNotFoundError, EntryAlreadyExistsError
from personalapi.views import public_view, admin_view, serialize, serialize_all
from personalapi.utils import load_config, app_prefix, is_admin, guarantee_500_response
from personalapi.lambdas.events import path_parameter, query_parameter, json_body
from personalapi.lambdas.responses import (
    response_200,
    response_400,
    response_401,
    response_404,
    response_409,
    respond_503_on_store_error,
)
from personalapi.lambdas.shortener.constants import (
    MISSING_SHORTNAME,
    INVALID_STATS_PAYLOAD,
    SHORTLINK_CREATED,
    SHORTLINK_DELETED,
    SHORTLINK_STATS_UPDATED,
)


logger = logging.getLogger(__name__)

LAMBDA_NAME = 'shortener'


def shortlink_dao() -> ShortlinkDAO:
    app_config = load_config(LAMBDA_NAME)
    return ShortlinkDAO(store_from_config(app_config, prefix=app_prefix()))


def unauthorized() -> LambdaResponse:
    logger.info('Unauthorized request. Responding with 401.', extra={'event': UNAUTHORIZED})
    return response_401(message='missing or invalid bearer token', error_code=UNAUTHORIZED)


@guarantee_500_response
@respond_503_on_store_error
def list_entries_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """List live shortlinks in order of creation date

    Query parameters:
        after: short name of the last entry of the previous page (excluded from the result).

    HTTP responses:
        200: {"items": [...], "count": <len(items)>, "total_count": <all stored shortlinks>}
        503: backing store unavailable
    """
    total_count, entries = shortlink_dao().list_undeleted(after=query_parameter(event, 'after'))
    items = serialize_all([public_view(entry) for entry in entries])
    return response_200({'items': items, 'count': len(items), 'total_count': total_count})


@guarantee_500_response
@respond_503_on_store_error
def get_entry_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Retrieve a single shortlink, deleted or not (admin only)

    HTTP responses:
        200: shortlink, including `deleted_at`
        400: missing short name in path
        401: missing or invalid bearer token
        404: no shortlink with this short name
        503: backing store unavailable
    """
    if not is_admin(event):
        return unauthorized()

    shortname = path_parameter(event, 'shortname')
    if not shortname:
        return response_400(message="missing 'shortname' in path", error_code=MISSING_SHORTNAME)

    try:
        entry = shortlink_dao().get(shortname)
    except EntryNotFoundError:
        logger.info('Shortlink not found. Responding with 404.', extra={'key': shortname, 'event': ENTRY_NOT_FOUND})
        return response_404(message=f"no shortlink named '{shortname}'", error_code=ENTRY_NOT_FOUND)

    return response_200(serialize(admin_view(entry)))


@guarantee_500_response
@respond_503_on_store_error
def create_entry_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Create a shortlink (admin only)

    Request body (JSON):
        {"shortname": str, "longurl": str}

    A short name is never reused, even after its shortlink was deleted.

    HTTP responses:
        200: created shortlink
        400: invalid JSON body or field validation failure
        401: missing or invalid bearer token
        409: short name already taken
        503: backing store unavailable
    """
    if not is_admin(event):
        return unauthorized()

    try:
        form = json_body(event)
    except ValueError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY)

    try:
        entry = ShortlinkEntryModel.from_form(form)
    except ValidationError as e:
        logger.info('Shortlink submission rejected. Responding with 400.', extra={'event': VALIDATION_FAILED, 'reason': str(e)})
        return response_400(message=str(e), error_code=VALIDATION_FAILED)

    try:
        shortlink_dao().create_if_absent(entry)
    except EntryAlreadyExistsError:
        logger.info('Short name already taken. Responding with 409.', extra={'key': entry.key, 'event': ENTRY_ALREADY_EXISTS})
        return response_409(message=f"shortlink '{entry.key}' already exists", error_code=ENTRY_ALREADY_EXISTS)

    logger.info('Shortlink created. Responding with 200.', extra={'key': entry.key, 'event': SHORTLINK_CREATED})
    return response_200(serialize(public_view(entry)))


@guarantee_500_response
@respond_503_on_store_error
def delete_entry_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Soft-delete a shortlink and return it (admin only)

    HTTP responses:
        200: deleted shortlink, including `deleted_at`
        400: missing short name in path
        401: missing or invalid bearer token
        404: no shortlink with this short name
        503: backing store unavailable
    """
    if not is_admin(event):
        return unauthorized()

    shortname = path_parameter(event, 'shortname')
    if not shortname:
        return response_400(message="missing 'shortname' in path", error_code=MISSING_SHORTNAME)

    try:
        entry = shortlink_dao().soft_delete(shortname)
    except EntryNotFoundError:
        logger.info('Shortlink not found. Responding with 404.', extra={'key': shortname, 'event': ENTRY_NOT_FOUND})
        return response_404(message=f"no shortlink named '{shortname}'", error_code=ENTRY_NOT_FOUND)

    logger.info('Shortlink deleted. Responding with 200.', extra={'key': shortname, 'event': SHORTLINK_DELETED})
    return response_200(serialize(admin_view(entry)))


@guarantee_500_response
@respond_503_on_store_error
def update_stats_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Bulk update shortlink records (click counters) (admin only)

    Request body (JSON): an array of shortlink records, e.g.
        [{"shortname": "gh", "longurl": "https://github.com/...", "clicks": 42}]

    Only the click counters are updated. Unknown short names are reported back.

    The whole payload is validated before anything is written.

    HTTP responses:
        200: {"updated": <number of records written>, "missing": [<unknown short names>]}
        400: invalid JSON, payload is not an array, or an element can't be parsed
        401: missing or invalid bearer token
        503: backing store unavailable (records written so far stay written)
    """
    if not is_admin(event):
        return unauthorized()

    try:
        payload = json_body(event)
    except ValueError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY)

    if not isinstance(payload, list):
        return response_400(message='payload must be an array', error_code=INVALID_STATS_PAYLOAD)

    try:
        stats = [ShortlinkEntryModel.parse_stats(item) for item in payload]
    except ValidationError as e:
        logger.info('Stats payload rejected. Responding with 400.', extra={'event': INVALID_STATS_PAYLOAD, 'reason': str(e)})
        return response_400(message=str(e), error_code=INVALID_STATS_PAYLOAD)

    updated, missing = shortlink_dao().update_stats(stats)
    logger.info(
        'Shortlink stats updated. Responding with 200.',
        extra={'updated': updated, 'missing': missing, 'event': SHORTLINK_STATS_UPDATED},
    )
    return response_200({'updated': updated, 'missing': missing})
