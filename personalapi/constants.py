from enum import StrEnum


class Limits:
    """Field size limits for client submissions.

    Limits count characters (Unicode code points, i.e. len(str)), not encoded
    bytes. A non-ASCII name of 600 characters is accepted even though it is
    up to 2400 bytes in UTF-8.
    """

    GUESTBOOK_NAME = 600
    GUESTBOOK_MESSAGE = 1200


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'
        ADMIN_BEARER_TOKEN = 'ADMIN_BEARER_TOKEN'  # noqa: S105

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'
        AGENT_URL = 'APPCONFIG_AGENT_URL'
        PROFILE_NAME = 'APPCONFIG_PROFILE_NAME'

    class LocalStack(StrEnum):
        ENDPOINT = 'LOCALSTACK_ENDPOINT'  # usually http://localstack:4566


class Backend(StrEnum):
    """Supported backing stores (AppConfig `active_backend`)."""

    REDIS = 'redis'
    DYNAMODB = 'dynamodb'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
VALIDATION_FAILED = 'VALIDATION_FAILED'
UNAUTHORIZED = 'UNAUTHORIZED'
ENTRY_NOT_FOUND = 'ENTRY_NOT_FOUND'
ENTRY_ALREADY_EXISTS = 'ENTRY_ALREADY_EXISTS'
STORE_UNAVAILABLE = 'STORE_UNAVAILABLE'
