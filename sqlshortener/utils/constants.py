# Default alias generation parameters
DEFAULT_ALIAS_LENGTH = 6
DEFAULT_ALIAS_ATTEMPTS = 5

# Logging
LOG_LEVEL_ENV = 'LOG_LEVEL'

# Database: SQLAlchemy URL, takes precedence over AppConfig
DATABASE_URL_ENV = 'DATABASE_URL'

# AppConfig: identifiers of the configuration document
APPCONFIG_APP_ID_ENV = 'APPCONFIG_APP_ID'
APPCONFIG_ENV_ID_ENV = 'APPCONFIG_ENV_ID'
APPCONFIG_PROFILE_ID_ENV = 'APPCONFIG_PROFILE_ID'
