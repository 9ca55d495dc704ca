"""Guestbook API handlers

Routes:
    GET  /guestbook               -> list_entries_handler
    GET  /guestbook/{id}          -> get_entry_handler
    POST /guestbook               -> create_entry_handler
    POST /guestbook/{id}/delete   -> delete_entry_handler (admin)
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
from personalapi.models import GuestbookEntryModel
from personalapi.dao import GuestbookDAO, store_from_config
from personalapi.dao.exceptions import EntryNotFoundError, EntryAlreadyExistsError
from personalapi.views import Field, public_view, admin_view, serialize, serialize_all
from personalapi.utils import load_config, app_prefix, is_admin, guarantee_500_response
from personalapi.lambdas.events import path_parameter, query_parameter, query_flag, json_body
from personalapi.lambdas.responses import (
    response_200,
    response_400,
    response_401,
    response_404,
    response_409,
    respond_503_on_store_error,
)
from personalapi.lambdas.guestbook.constants import (
    MISSING_ENTRY_ID,
    GUESTBOOK_ENTRY_CREATED,
    GUESTBOOK_ENTRY_DELETED,
    GUESTBOOK_ENTRIES_LISTED,
)


logger = logging.getLogger(__name__)

LAMBDA_NAME = 'guestbook'


def guestbook_dao() -> GuestbookDAO:
    app_config = load_config(LAMBDA_NAME)
    return GuestbookDAO(store_from_config(app_config, prefix=app_prefix()))


@guarantee_500_response
@respond_503_on_store_error
def list_entries_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """List live guestbook entries in order of creation date

    Query parameters:
        after: id of the last entry of the previous page (excluded from the result).
        qa:    if true, include (and flag) entries submitted as QA.

    HTTP responses:
        200: {"items": [...], "count": <len(items)>, "total_count": <all stored entries>}
             NOTE: total_count includes deleted entries.
        503: backing store unavailable
    """
    after = query_parameter(event, 'after')
    include_qa = query_flag(event, 'qa')

    total_count, entries = guestbook_dao().list_undeleted(include_qa=include_qa, after=after)

    extra_fields = (Field.QA,) if include_qa else ()
    items = serialize_all([public_view(entry, *extra_fields) for entry in entries])

    logger.debug(
        'Listed guestbook entries.',
        extra={'event': GUESTBOOK_ENTRIES_LISTED, 'after': after, 'count': len(items), 'total_count': total_count},
    )
    return response_200({'items': items, 'count': len(items), 'total_count': total_count})


@guarantee_500_response
@respond_503_on_store_error
def get_entry_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Retrieve a single guestbook entry, deleted or not

    Every caller sees `deleted_at`. Admin callers also see `qa`.

    HTTP responses:
        200: entry
        400: missing id in path
        404: no entry with this id
        503: backing store unavailable
    """
    entry_id = path_parameter(event, 'id')
    if not entry_id:
        return response_400(message="missing 'id' in path", error_code=MISSING_ENTRY_ID)

    try:
        entry = guestbook_dao().get(entry_id)
    except EntryNotFoundError:
        logger.info('Guestbook entry not found. Responding with 404.', extra={'key': entry_id, 'event': ENTRY_NOT_FOUND})
        return response_404(message=f"no guestbook entry with id '{entry_id}'", error_code=ENTRY_NOT_FOUND)

    view = admin_view(entry) if is_admin(event) else public_view(entry, Field.DELETED_AT)
    return response_200(serialize(view))


@guarantee_500_response
@respond_503_on_store_error
def create_entry_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Create a guestbook entry

    Request body (JSON):
        {"name": str (<= 600), "message": str (<= 1200), "email": str?, "url": str?, "qa": bool?}

    Entries created with `qa: true` are stored and counted, but hidden from listings
    unless explicitly requested.

    HTTP responses:
        200: created entry (with `qa` when the entry is a QA entry)
        400: invalid JSON body or field validation failure
        409: generated id collided with an existing entry
        503: backing store unavailable
    """
    try:
        form = json_body(event)
    except ValueError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY)

    try:
        entry = GuestbookEntryModel.from_form(form)
    except ValidationError as e:
        logger.info('Guestbook submission rejected. Responding with 400.', extra={'event': VALIDATION_FAILED, 'reason': str(e)})
        return response_400(message=str(e), error_code=VALIDATION_FAILED)

    try:
        guestbook_dao().create_if_absent(entry)
    except EntryAlreadyExistsError:  # pragma: no cover
        logger.warning('Generated guestbook id already taken. Responding with 409.', extra={'key': entry.key, 'event': ENTRY_ALREADY_EXISTS})
        return response_409(message=f"guestbook entry '{entry.key}' already exists", error_code=ENTRY_ALREADY_EXISTS)

    logger.info('Guestbook entry created. Responding with 200.', extra={'key': entry.key, 'qa': entry.qa, 'event': GUESTBOOK_ENTRY_CREATED})
    view = public_view(entry, Field.QA) if entry.qa else public_view(entry)
    return response_200(serialize(view))


@guarantee_500_response
@respond_503_on_store_error
def delete_entry_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Soft-delete a guestbook entry and return it (admin only)

    Requires `Authorization: Bearer <ADMIN_BEARER_TOKEN>`.
    Deleting an already deleted entry succeeds and re-stamps `deleted_at`.

    HTTP responses:
        200: deleted entry, including `deleted_at` and `qa`
        400: missing id in path
        401: missing or invalid bearer token
        404: no entry with this id
        503: backing store unavailable
    """
    if not is_admin(event):
        logger.info('Unauthorized delete request. Responding with 401.', extra={'event': UNAUTHORIZED})
        return response_401(message='missing or invalid bearer token', error_code=UNAUTHORIZED)

    entry_id = path_parameter(event, 'id')
    if not entry_id:
        return response_400(message="missing 'id' in path", error_code=MISSING_ENTRY_ID)

    try:
        entry = guestbook_dao().soft_delete(entry_id)
    except EntryNotFoundError:
        logger.info('Guestbook entry not found. Responding with 404.', extra={'key': entry_id, 'event': ENTRY_NOT_FOUND})
        return response_404(message=f"no guestbook entry with id '{entry_id}'", error_code=ENTRY_NOT_FOUND)

    logger.info('Guestbook entry deleted. Responding with 200.', extra={'key': entry_id, 'event': GUESTBOOK_ENTRY_DELETED})
    return response_200(serialize(admin_view(entry)))
