"""
Interactive session.

Loads the workspace once, then drives the screens: the collection browser,
the settings editor, and the preview / edit / execute loop for a request.
Each screen is a small state machine fed one key at a time by the
:class:`~postless.views.terminal.Terminal`.
"""

from pathlib import Path
from typing import Callable, List, Optional, TypeVar

import httpx
from rich.console import RenderableType
from rich.text import Text

from postless.config import Settings, settings as default_settings
from postless.exceptions import PostlessError, RequestFileError, StorageError, WorkspaceError
from postless.execution.executor import HttpResult, RequestExecutor
from postless.logger import get_logger
from postless.models import Collection, Config, RequestItem, Secret
from postless.storage.config_store import ConfigStore, WorkspacePaths
from postless.storage.file_store import FileStore
from postless.storage.repository import CollectionRepository, find_request
from postless.views import styles
from postless.views.body_editor import BodyEditor, FieldSelected, apply_field_edits, render_body_editor
from postless.views.navigation import NavigationState, render_navigation
from postless.views.preview import PreviewAction, preview_action, render_preview
from postless.views.response_view import render_response
from postless.views.results import Cancelled, FieldEdits, RequestSelected, SettingsSelected, ViewResult
from postless.views.settings_editor import SettingsEditor
from postless.views.terminal import Terminal
from postless.views.text_input import TextInput, render_text_input

logger = get_logger(__name__)

T = TypeVar("T")


class Session:
    """One run of the interactive client."""

    def __init__(
        self,
        base_dir: Path,
        terminal: Optional[Terminal] = None,
        file_store: Optional[FileStore] = None,
        transport: Optional[httpx.BaseTransport] = None,
        app_settings: Optional[Settings] = None
    ):
        """
        Initialize the session.

        Args:
            base_dir: Directory containing the workspace directory
            terminal: Key source and render sink (defaults to the real terminal)
            file_store: File access (defaults to the local filesystem)
            transport: Optional httpx transport for request execution
            app_settings: Application settings (defaults to the global settings)
        """
        self.app_settings = app_settings or default_settings
        self.terminal = terminal or Terminal()
        self.paths = WorkspacePaths(base_dir, self.app_settings)
        file_store = file_store or FileStore()
        self.config_store = ConfigStore(self.paths, file_store)
        self.repository = CollectionRepository(self.paths, file_store)
        self.settings_editor = SettingsEditor(self.config_store)
        self.transport = transport

        self.config: Optional[Config] = None
        self.secret: Optional[Secret] = None
        self.collections: List[Collection] = []
        self.last_result: Optional[HttpResult] = None

    def load(self) -> None:
        """
        Validate the workspace and load config, secret and collections.

        Raises:
            PostlessError: On any setup problem
        """
        self.config_store.check_workspace()
        self.config = self.config_store.load_config()
        self.secret = self.config_store.load_secret()
        self.repository.check_requests_dir()
        self.collections = self.repository.load_collections()
        if not self.collections:
            raise WorkspaceError("No collections found in requests directory")
        logger.info(f"Loaded {len(self.collections)} collections from {self.paths.requests_dir}")

    def run(self) -> int:
        """
        Run the session until the user quits or a request has been executed.

        Returns:
            int: Process exit code
        """
        try:
            self.load()
        except PostlessError as e:
            logger.debug(f"Setup failed: {e}")
            self.terminal.print(Text(f"⚠️  {e}", style=styles.ERROR))
            return 1

        start_page = 0
        while True:
            result = self.browse(start_page)

            if isinstance(result, SettingsSelected):
                self.edit_setting(result.key)
                start_page = len(self.collections)
                continue

            if isinstance(result, RequestSelected):
                item = find_request(self.collections, result.collection, result.name)
                if item is not None:
                    self.request_loop(item)
            return 0

    def browse(self, start_page: int = 0) -> ViewResult:
        state = NavigationState(
            self.collections, self.config, self.secret,
            max_visible=self.app_settings.max_visible_rows,
            start_page=start_page,
        )
        return self._drive(lambda: render_navigation(state), state.handle_key)

    def prompt(self, title: str, initial: str = "") -> Optional[str]:
        """Ask for one line of text; None if the user cancelled."""
        text_input = TextInput(title, initial, self.app_settings.input_char_limit)
        while True:
            self.terminal.render(render_text_input(text_input))
            if text_input.handle_key(self.terminal.read_key()):
                return text_input.value

    def pause(self, message: str, style: str = styles.ERROR) -> None:
        self.terminal.render(Text.assemble(
            "\n",
            (f"{message}\n\n", style),
            ("Press any key to continue...", styles.FOOTER),
        ))
        self.terminal.read_key()

    def edit_setting(self, key: str) -> None:
        try:
            title, current = self.settings_editor.prompt_for(key, self.config, self.secret)
        except KeyError:
            logger.warning(f"Unknown settings key {key!r}")
            return

        raw_value = self.prompt(title, current)
        update = self.settings_editor.apply(key, raw_value, self.config, self.secret)
        self.config, self.secret = update.config, update.secret

        if update.changed:
            self.pause(f"✓ {update.message}", styles.SUCCESS)
        elif update.message:
            self.pause(f"⚠️  {update.message}", styles.ERROR if update.is_error else styles.WARNING)

    def request_loop(self, item: RequestItem) -> Optional[HttpResult]:
        """
        Preview ``item`` until the user executes it or backs out.

        Returns:
            Optional[HttpResult]: The execution result, or None if cancelled
        """
        while True:
            action = self._drive(lambda: render_preview(item, self.config, self.secret), preview_action)
            if action == PreviewAction.CANCEL:
                return None
            if action == PreviewAction.EDIT:
                self.edit_body(item)
                continue
            return self.execute(item)

    def edit_body(self, item: RequestItem) -> None:
        """Run the body editor for ``item`` and persist any changes."""
        body = item.request.body
        if body is None:
            self.pause("⚠️  This request has no body to edit")
            return

        editor = BodyEditor(body, self.app_settings.max_visible_rows)
        if not editor.has_fields:
            self.pause("⚠️  Nothing to edit: the body is not a JSON object")
            return

        while True:
            self.terminal.render(render_body_editor(editor))
            outcome = editor.handle_key(self.terminal.read_key())
            if isinstance(outcome, FieldSelected):
                editor.submit(outcome.key, self.prompt(f"Edit {outcome.key}", outcome.value))
            elif isinstance(outcome, Cancelled):
                return
            elif isinstance(outcome, FieldEdits):
                break

        if outcome.pairs:
            self.save_body(item, apply_field_edits(body, outcome.pairs))

    def save_body(self, item: RequestItem, new_body: dict) -> None:
        """
        Persist ``new_body`` for ``item`` and reload the file.

        A failed write keeps the edited request in memory and reports the error.
        """
        edited = item.request.model_copy(update={"body": new_body})
        try:
            self.repository.save_request(item, edited)
        except StorageError as e:
            item.request = edited
            self.pause(f"⚠️  Failed to save changes: {e}")
            return

        try:
            self.repository.reload_request(item)
        except (StorageError, RequestFileError) as e:
            logger.warning(f"Reloading {item.file_path} after save failed: {e}")
            item.request = edited

    def execute(self, item: RequestItem) -> HttpResult:
        self.terminal.render(Text("\n⏳ Executing request...\n", style=styles.REDIRECT))
        executor = RequestExecutor(self.config, self.secret, transport=self.transport)
        result = executor.execute(item.request)
        self.last_result = result
        self.terminal.render(render_response(result, item.name))
        return result

    def _drive(self, render: Callable[[], RenderableType], handle_key: Callable[[str], Optional[T]]) -> T:
        while True:
            self.terminal.render(render())
            outcome = handle_key(self.terminal.read_key())
            if outcome is not None:
                return outcome
