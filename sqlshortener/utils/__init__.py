from sqlshortener.utils.config import load_config, database_url
from sqlshortener.utils.helpers import require_environment
from sqlshortener.utils.shortener import generate_alias, shorten
from sqlshortener.utils.logging import initialize_logging


__all__ = [
    'generate_alias',
    'shorten',
    'load_config',
    'database_url',
    'require_environment',
    'initialize_logging',
]
