from enum import Enum

SERVICE_NAME = "healthwatch"

DEFAULT_TIMEOUT_MS = 5000
DEFAULT_RETRIES = 0
DEFAULT_RETRY_DELAY_MS = 1000
DEFAULT_HISTORY_CAPACITY = 100


class EnumEnvironment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class EnumLogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"
