from personalapi.utils.config import app_env, app_name, app_prefix, load_config
from personalapi.utils.helpers import utc_now, to_iso, from_iso, require_environment, guarantee_500_response
from personalapi.utils.auth import is_admin
from personalapi.utils.logging import initialize_logging


__all__ = [
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'utc_now',
    'to_iso',
    'from_iso',
    'require_environment',
    'guarantee_500_response',
    'is_admin',
    'initialize_logging',
]
