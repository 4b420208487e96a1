"""postless constants."""

# Config
DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_BASE_URL = "http://localhost:3000"
BASE_URL_TOKEN = "{{baseUrl}}"

# Settings page keys
class SettingsKey:
    BASE_URL = "baseUrl"
    JWT = "jwt"
    TIMEOUT = "timeout"

SETTINGS_LABELS = {
    SettingsKey.BASE_URL: "Base URL",
    SettingsKey.JWT: "JWT Token",
    SettingsKey.TIMEOUT: "Timeout (seconds)",
}

# Navigation
SCROLL_MARGIN = 2
SETTINGS_PAGE_TITLE = "settings"

# Execution
JSON_CONTENT_TYPE = "application/json"
TRUNCATION_SUFFIX = "... (truncated)"
