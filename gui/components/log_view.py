"""Packaging log display component."""

from typing import Callable

import flet as ft

from ..strings import Strings

LEVEL_COLORS = {
    "info": None,
    "warning": ft.Colors.ORANGE,
    "error": ft.Colors.RED,
    "success": ft.Colors.GREEN,
}

# Oldest entries are dropped beyond this many lines
MAX_ENTRIES = 500


class LogView:
    """Scrolling log with copy, copy-details and clear buttons."""

    def __init__(
        self,
        page: ft.Page,
        get_debug_log: Callable[[], str] | None = None,
    ):
        """Initialize log view.

        Args:
            page: Flet page instance for updates
            get_debug_log: Callback returning the captured pipeline output
        """
        self.page = page
        self._entries: list[tuple[str, str]] = []
        self._get_debug_log = get_debug_log

        self.log_list = ft.ListView(
            expand=True,
            spacing=2,
            auto_scroll=True,
        )

        self.container = self._build()

    def _build(self) -> ft.Container:
        buttons = ft.Row(
            [
                ft.TextButton(Strings.COPY, on_click=self._on_copy_click),
                ft.TextButton(Strings.COPY_DEBUG, on_click=self._on_copy_debug_click),
                ft.TextButton(Strings.CLEAR, on_click=lambda e: self.clear()),
            ],
            spacing=0,
        )
        return ft.Container(
            content=ft.Column(
                [
                    ft.Row(
                        [
                            ft.Text(
                                Strings.CONVERSION_LOG,
                                weight=ft.FontWeight.BOLD,
                                size=12,
                            ),
                            buttons,
                        ],
                        alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                    ),
                    ft.Container(
                        content=self.log_list,
                        border=ft.Border.all(1, ft.Colors.GREY_300),
                        border_radius=5,
                        padding=10,
                        expand=True,
                    ),
                ],
                spacing=5,
                expand=True,
            ),
            expand=True,
        )

    def add(self, message: str, level: str = "info"):
        """Append a line.

        Args:
            message: Log message
            level: "info", "warning", "error", or "success"
        """
        self._entries.append((level, message))
        self.log_list.controls.append(
            ft.Text(message, color=LEVEL_COLORS.get(level), size=12, selectable=True)
        )
        if len(self._entries) > MAX_ENTRIES:
            del self._entries[0]
            del self.log_list.controls[0]
        if self.page.controls:
            self.page.update()

    def clear(self):
        self.log_list.controls.clear()
        self._entries.clear()
        self.page.update()

    def get_text(self) -> str:
        """Get the log as plain text, warnings and errors tagged."""
        lines = []
        for level, message in self._entries:
            if level in ("warning", "error"):
                lines.append(f"[{level.upper()}] {message}")
            else:
                lines.append(message)
        return "\n".join(lines)

    async def _on_copy_click(self, e):
        await ft.Clipboard().set(self.get_text())
        self.add(Strings.LOG_COPIED)

    async def _on_copy_debug_click(self, e):
        debug_content = self._get_debug_log() if self._get_debug_log else ""
        if debug_content:
            await ft.Clipboard().set(debug_content)
            self.add(Strings.DEBUG_LOG_COPIED)
        else:
            self.add(Strings.NO_DEBUG_LOG, "warning")
