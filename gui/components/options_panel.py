"""Packaging options panel component."""

import flet as ft

from mspack import PackageOptions, ValueMode

from ..strings import Strings


def parse_fade(value: str | None) -> int:
    """Parse a fade text field; empty or invalid input counts as 0."""
    if not value:
        return 0
    try:
        return max(0, int(value))
    except ValueError:
        return 0


class OptionsPanel:
    """Options panel with name fields, fades, mode and compression."""

    def __init__(self, page: ft.Page):
        """Initialize options panel.

        Args:
            page: Flet page instance (for dialogs)
        """
        self.page = page

        # Descriptor metadata
        self.name_field = ft.TextField(
            label=Strings.NAME_LABEL,
            hint_text=Strings.NAME_HINT,
            expand=True,
            dense=True,
        )
        self.author_field = ft.TextField(
            label=Strings.AUTHOR_LABEL,
            width=160,
            dense=True,
        )

        # Value mode
        self.mode_group = ft.RadioGroup(
            value=ValueMode.VELOCITY.value,
            content=ft.Row(
                [
                    ft.Radio(value=ValueMode.VELOCITY.value, label=Strings.MODE_VELOCITY),
                    ft.Radio(value=ValueMode.SELECTION.value, label=Strings.MODE_SELECTION),
                ]
            ),
            on_change=self._on_mode_change,
        )

        # Fades
        self.key_fade_field = self._fade_field(Strings.KEY_FADE_LABEL)
        self.secondary_fade_field = self._fade_field(Strings.SECONDARY_FADE_LABEL)

        # Redistribution (offered only when a key has several samples)
        self._duplicates_available = False
        self.redistribute_cb = ft.Checkbox(
            label=Strings.REDISTRIBUTE,
            value=False,
            disabled=True,
            on_change=self._on_redistribute_toggle,
        )
        self.redistribute_fade_field = self._fade_field(
            Strings.REDISTRIBUTE_FADE_LABEL, disabled=True
        )

        self.compress_cb = ft.Checkbox(
            label=Strings.COMPRESS,
            value=True,
        )

        self.options_help_btn = ft.IconButton(
            icon=ft.Icons.HELP_OUTLINE,
            icon_size=18,
            tooltip=Strings.OPTIONS_HELP_TITLE,
            on_click=self._show_options_help,
        )

        # Build container
        self.container = self._build()

    def _fade_field(self, label: str, disabled: bool = False) -> ft.TextField:
        return ft.TextField(
            label=label,
            value="0",
            width=100,
            dense=True,
            disabled=disabled,
            input_filter=ft.NumbersOnlyInputFilter(),
        )

    def _redistribute_allowed(self) -> bool:
        return (
            self._duplicates_available
            and self.mode_group.value == ValueMode.VELOCITY.value
        )

    def _sync_redistribute(self):
        allowed = self._redistribute_allowed()
        self.redistribute_cb.disabled = not allowed
        if not allowed:
            self.redistribute_cb.value = False
        self.redistribute_fade_field.disabled = not (
            allowed and self.redistribute_cb.value
        )

    def set_duplicates_available(self, available: bool):
        """Offer redistribution only when the scanned folder has shared keys."""
        self._duplicates_available = available
        self._sync_redistribute()
        self.page.update()

    def set_default_name(self, name: str):
        """Fill the name field from the sample folder unless the user typed one."""
        if not self.name_field.value:
            self.name_field.value = name
            self.page.update()

    def _on_mode_change(self, e):
        self._sync_redistribute()
        self.page.update()

    def _on_redistribute_toggle(self, e):
        self._sync_redistribute()
        self.page.update()

    def _show_options_help(self, e):
        """Show options help dialog."""
        dialog = ft.AlertDialog(
            modal=False,
            title=ft.Text(Strings.OPTIONS_HELP_TITLE),
            content=ft.Text(Strings.OPTIONS_HELP_TEXT),
            actions=[
                ft.TextButton(Strings.OK, on_click=lambda e: self.page.pop_dialog()),
            ],
            actions_alignment=ft.MainAxisAlignment.END,
        )
        self.page.show_dialog(dialog)

    def _build(self) -> ft.Container:
        """Build the options panel container."""
        return ft.Container(
            content=ft.Column(
                [
                    # Header row with title and help button
                    ft.Row(
                        [
                            ft.Text(
                                Strings.OPTIONS,
                                weight=ft.FontWeight.BOLD,
                                size=12,
                            ),
                            self.options_help_btn,
                        ],
                        alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                    ),
                    ft.Row([self.name_field, self.author_field]),
                    ft.Text(Strings.MODE_LABEL, size=12),
                    self.mode_group,
                    ft.Row([self.key_fade_field, self.secondary_fade_field]),
                    ft.Row(
                        [self.redistribute_cb, self.redistribute_fade_field],
                        vertical_alignment=ft.CrossAxisAlignment.CENTER,
                    ),
                    ft.Row([self.compress_cb]),
                ],
                spacing=8,
            ),
            padding=10,
            border=ft.Border.all(1, ft.Colors.GREY_300),
            border_radius=8,
        )

    def get_options(self) -> PackageOptions:
        """Get current options as PackageOptions."""
        redistribute_fade = None
        if self._redistribute_allowed() and self.redistribute_cb.value:
            redistribute_fade = parse_fade(self.redistribute_fade_field.value)

        return PackageOptions(
            name=(self.name_field.value or "").strip(),
            author=self.author_field.value or "",
            key_fade=parse_fade(self.key_fade_field.value),
            mode=ValueMode(self.mode_group.value or ValueMode.VELOCITY.value),
            secondary_fade=parse_fade(self.secondary_fade_field.value),
            redistribute_fade=redistribute_fade,
            compress=self.compress_cb.value or False,
        )
