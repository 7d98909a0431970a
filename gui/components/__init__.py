"""GUI components for Multisample Packer."""

from .input_selector import InputSelector
from .log_view import LogView
from .options_panel import OptionsPanel
from .output_picker import OutputPicker

__all__ = ["OutputPicker", "OptionsPanel", "InputSelector", "LogView"]
