"""Main Flet application."""

from pathlib import Path

import flet as ft

from mspack import __version__ as mspack_version

from .components import InputSelector, LogView, OptionsPanel, OutputPicker
from .converter import ConverterBridge
from .strings import Strings


class MspackApp:
    """Main application class."""

    def __init__(self, page: ft.Page):
        """Initialize the application.

        Args:
            page: Flet page instance
        """
        self.page = page
        self._output_path: str | None = None
        self._input_path: str | None = None

        self._setup_page()
        self._setup_services()
        self._create_components()
        self._build_layout()

        self.log_view.add(Strings.READY_MESSAGE, "info")
        self.log_view.add(
            f"mspack v{mspack_version} (Flet {ft.version.__version__})", "info"
        )

    def _setup_page(self):
        """Configure page properties."""
        self.page.title = Strings.APP_TITLE
        self.page.window.width = 560
        self.page.window.height = 880
        self.page.padding = 20

    def _setup_services(self):
        """Register page services."""
        self.file_picker = ft.FilePicker()
        self.page.services.append(self.file_picker)

    def _create_components(self):
        """Create all GUI components."""
        # Converter bridge (created first for debug log callback)
        self.converter = ConverterBridge(self._gui_log)

        self.log_view = LogView(
            page=self.page,
            get_debug_log=self.converter.get_debug_log,
        )

        self.output_picker = OutputPicker(
            page=self.page,
            file_picker=self.file_picker,
            on_selected=self._on_output_selected,
            log_callback=self._gui_log,
        )

        self.options_panel = OptionsPanel(page=self.page)

        self.input_selector = InputSelector(
            page=self.page,
            file_picker=self.file_picker,
            on_folder_selected=self._on_input_selected,
            on_build=self._on_build,
        )

    def _build_layout(self):
        """Build the page layout."""
        self.page.add(
            ft.Text(
                Strings.APP_TITLE,
                size=20,
                weight=ft.FontWeight.BOLD,
            ),
            ft.Container(height=10),
            self.output_picker.container,
            ft.Container(height=10),
            self.options_panel.container,
            ft.Container(height=10),
            self.input_selector.container,
            ft.Container(height=10),
            self.log_view.container,
        )

    def _gui_log(self, message: str, level: str = "info"):
        """Log callback for GUI."""
        self.log_view.add(message, level)

    def _on_output_selected(self, path: str):
        """Handle output folder selection."""
        self._output_path = path
        self.input_selector.set_enabled(True)

    async def _on_input_selected(self, path: str):
        """Scan the chosen folder and offer redistribution if keys are shared."""
        self._input_path = path
        folder = Path(path)
        self.options_panel.set_default_name(folder.name)
        self._gui_log(Strings.SCANNING.format(folder=folder.name), "info")

        options = self.options_panel.get_options()
        if not options.name:
            options.name = folder.name
        result = await self.converter.scan_folder(path, options)
        if result is None:
            self.options_panel.set_duplicates_available(False)
            self.input_selector.set_ready(False)
            return

        samples, keys, duplicates = result
        self._gui_log(Strings.SCAN_RESULT.format(samples=samples, keys=keys), "info")
        if duplicates:
            self._gui_log(Strings.SCAN_DUPLICATES.format(count=duplicates), "info")
        self.options_panel.set_duplicates_available(duplicates > 0)
        self.output_picker.warn_if_exists(options.name)
        self.input_selector.set_ready(True)

    async def _on_build(self):
        """Build the package from the scanned folder."""
        if not self._output_path:
            self._gui_log(Strings.SELECT_OUTPUT_FIRST, "error")
            return
        if not self._input_path:
            self._gui_log(Strings.SELECT_INPUT_FIRST, "error")
            return

        options = self.options_panel.get_options()
        if not options.name:
            options.name = Path(self._input_path).name
        self._gui_log(Strings.STARTING_BUILD.format(name=options.name), "info")

        # Disable input during the build
        self.input_selector.set_enabled(False)
        try:
            stats = await self.converter.build(
                self._input_path, self._output_path, options
            )
            if stats is not None:
                self._gui_log(
                    Strings.BUILD_RESULT.format(
                        path=stats.archive_path, zones=stats.zones_written
                    ),
                    "success",
                )
            await self._show_completion_dialog(stats is not None)
        finally:
            self.input_selector.set_enabled(True)

    async def _show_completion_dialog(self, success: bool):
        """Show completion dialog."""
        if success:
            title = Strings.CONVERSION_COMPLETE
            body = f"Output: {self._output_path}"
        else:
            title = Strings.CONVERSION_FAILED
            body = "See the log for details."
        dialog = ft.AlertDialog(
            modal=True,
            title=ft.Text(title),
            content=ft.Text(body),
            actions=[
                ft.TextButton(
                    Strings.OK,
                    on_click=lambda e: self.page.pop_dialog(),
                ),
            ],
            actions_alignment=ft.MainAxisAlignment.END,
        )
        self.page.show_dialog(dialog)
