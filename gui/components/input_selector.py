"""Sample folder selection and build trigger component."""

from pathlib import Path
from typing import Awaitable, Callable

import flet as ft

from ..strings import Strings


class InputSelector:
    """Sample folder picker plus the build button."""

    def __init__(
        self,
        page: ft.Page,
        file_picker: ft.FilePicker,
        on_folder_selected: Callable[[str], Awaitable[None]],
        on_build: Callable[[], Awaitable[None]],
    ):
        """Initialize input selector.

        Args:
            page: Flet page instance
            file_picker: FilePicker service
            on_folder_selected: Callback when a sample folder is chosen
            on_build: Callback when the build button is clicked
        """
        self.page = page
        self.file_picker = file_picker
        self.on_folder_selected = on_folder_selected
        self.on_build = on_build

        # Remember last directory for better UX
        self._last_directory: str | None = None
        self.selected_path: str | None = None

        self.folder_label = ft.Text(
            Strings.INPUT_HINT,
            size=11,
            color=ft.Colors.GREY_500,
            text_align=ft.TextAlign.CENTER,
        )

        # Buttons (initially disabled)
        self.select_folder_btn = ft.Button(
            Strings.SELECT_FOLDER,
            icon=ft.Icons.FOLDER_OPEN,
            on_click=self._on_select_folder,
            expand=True,
            disabled=True,
        )
        self.build_btn = ft.Button(
            Strings.BUILD,
            icon=ft.Icons.ARCHIVE,
            on_click=self._on_build_click,
            expand=True,
            disabled=True,
        )

        # Build container
        self.container = self._build()

    def _build(self) -> ft.Container:
        """Build the input selector container."""
        return ft.Container(
            content=ft.Column(
                [
                    ft.Text(
                        Strings.SELECT_INPUT,
                        weight=ft.FontWeight.BOLD,
                        size=12,
                    ),
                    ft.Row(
                        [self.select_folder_btn, self.build_btn],
                        spacing=10,
                    ),
                    self.folder_label,
                ],
                spacing=8,
                horizontal_alignment=ft.CrossAxisAlignment.CENTER,
            ),
            padding=15,
            border=ft.Border.all(1, ft.Colors.GREY_300),
            border_radius=8,
        )

    def set_enabled(self, enabled: bool):
        """Enable or disable the folder button; build needs a scanned folder too."""
        self.select_folder_btn.disabled = not enabled
        self.build_btn.disabled = not (enabled and self.selected_path)
        self.page.update()

    def set_ready(self, ready: bool):
        """Enable the build button once a folder has usable samples."""
        if not ready:
            self.selected_path = None
        self.build_btn.disabled = not ready
        self.page.update()

    async def _on_select_folder(self, e):
        """Handle folder selection."""
        result = await self.file_picker.get_directory_path(
            dialog_title=Strings.SELECT_INPUT_FOLDER_TITLE,
            initial_directory=self._last_directory,
        )
        if result:
            folder = Path(result)
            self._last_directory = str(folder.parent)
            self.selected_path = str(folder)
            self.folder_label.value = folder.name + "/"
            self.page.update()
            await self.on_folder_selected(self.selected_path)

    async def _on_build_click(self, e):
        await self.on_build()
