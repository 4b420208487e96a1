"""
Settings editor.

Three keys can be changed from the settings page: the base URL and timeout
(stored in ``config.json``) and the bearer token (stored in ``secret.json``).
Updates produce new model instances and persist only the file they touch.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from postless.constants import SETTINGS_LABELS, SettingsKey
from postless.exceptions import StorageError
from postless.logger import get_logger
from postless.models import Config, Secret, SettingsItem
from postless.storage.config_store import ConfigStore

logger = get_logger(__name__)


def settings_items(config: Config, secret: Secret) -> List[SettingsItem]:
    """Rows of the settings page, in display order."""
    return [
        SettingsItem(SettingsKey.BASE_URL, SETTINGS_LABELS[SettingsKey.BASE_URL], config.base_url),
        SettingsItem(SettingsKey.JWT, SETTINGS_LABELS[SettingsKey.JWT], secret.token),
        SettingsItem(SettingsKey.TIMEOUT, SETTINGS_LABELS[SettingsKey.TIMEOUT], str(config.resolve_timeout())),
    ]


@dataclass
class SettingsUpdate:
    """Outcome of applying one settings change."""
    config: Config
    secret: Secret
    changed: bool = False
    message: str = ""
    is_error: bool = False


class SettingsEditor:
    """Prompts for and applies a single settings change."""

    def __init__(self, store: ConfigStore):
        self.store = store

    def prompt_for(self, key: str, config: Config, secret: Secret) -> Tuple[str, str]:
        """
        Prompt text and current value for ``key``.

        Raises:
            KeyError: If ``key`` is not a settings key
        """
        if key == SettingsKey.BASE_URL:
            current = config.base_url
            return f"Current Base URL: {current}\nEnter new Base URL (or press ESC to cancel):", current
        if key == SettingsKey.JWT:
            current = secret.token
            return f"Current JWT: {current}\nEnter new JWT token (or press ESC to cancel):", current
        if key == SettingsKey.TIMEOUT:
            current = str(config.resolve_timeout())
            return (f"Current Timeout: {current} seconds\n"
                    f"Enter new timeout in seconds (or press ESC to cancel):"), current
        raise KeyError(key)

    def apply(self, key: str, raw_value: Optional[str], config: Config, secret: Secret) -> SettingsUpdate:
        """
        Apply a new value for ``key`` and persist the affected file.

        ``None`` (cancelled), empty input and the current value leave everything
        unchanged and nothing is written. A timeout that is not a positive
        integer is ignored. When the write fails the previous values
        are returned together with the error.

        Args:
            key: One of the :class:`~postless.constants.SettingsKey` values
            raw_value: Text entered by the user, or None when cancelled
            config: Current config
            secret: Current secret

        Returns:
            SettingsUpdate: The config and secret now in effect
        """
        unchanged = SettingsUpdate(config=config, secret=secret)
        if raw_value is None or raw_value == "":
            return unchanged

        try:
            if key == SettingsKey.BASE_URL:
                if raw_value == config.base_url:
                    return unchanged
                new_config = config.model_copy(update={"base_url": raw_value})
                self.store.save_config(new_config)
                return SettingsUpdate(new_config, secret, changed=True, message="Base URL updated")

            if key == SettingsKey.JWT:
                if raw_value.strip() == secret.token:
                    return unchanged
                new_secret = secret.model_copy(update={"jwt": raw_value.strip()})
                self.store.save_secret(new_secret)
                return SettingsUpdate(config, new_secret, changed=True, message="JWT token updated")

            if key == SettingsKey.TIMEOUT:
                timeout = _parse_timeout(raw_value)
                if timeout is None:
                    logger.info(f"Ignoring invalid timeout value {raw_value!r}")
                    unchanged.message = (f"Timeout must be a positive whole number of seconds; "
                                         f"keeping {config.resolve_timeout()}")
                    return unchanged
                if timeout == config.timeout:
                    return unchanged
                new_config = config.model_copy(update={"timeout": timeout})
                self.store.save_config(new_config)
                return SettingsUpdate(new_config, secret, changed=True, message="Timeout updated")
        except StorageError as e:
            logger.error(f"Failed to save setting {key}: {e}")
            unchanged.message = f"Failed to save settings: {e}"
            unchanged.is_error = True
            return unchanged

        logger.warning(f"Unknown settings key {key!r}")
        return unchanged


def _parse_timeout(raw_value: str) -> Optional[int]:
    try:
        timeout = int(raw_value.strip())
    except ValueError:
        return None
    return timeout if timeout > 0 else None
