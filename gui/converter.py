"""Bridge between GUI and mspack.py packaging functions."""

import asyncio
import io
import os
from contextlib import redirect_stdout
from typing import Callable

from mspack import (
    ConversionError,
    ConversionStats,
    PackageOptions,
    ValidationError,
    build_package,
    conversion_stats,
    find_duplicate_clusters,
    preview_zones,
)


class ConverterBridge:
    """Bridges GUI to mspack.py packaging functions."""

    def __init__(self, log_callback: Callable[[str, str], None]):
        """Initialize bridge with log callback.

        Args:
            log_callback: Function(message, level) for logging
        """
        self.log = log_callback
        self._debug_log: list[str] = []

    def get_debug_log(self) -> str:
        """Get the detailed output of the last scan/build."""
        return "\n".join(self._debug_log)

    def clear_debug_log(self):
        self._debug_log.clear()

    def _capture(self, func, *args):
        """Run func with stdout captured into the debug log."""
        stdout_capture = io.StringIO()
        try:
            with redirect_stdout(stdout_capture):
                return func(*args)
        finally:
            captured = stdout_capture.getvalue()
            if captured:
                self._debug_log.append(captured)

    def _scan(self, input_dir: str, options: PackageOptions) -> tuple[int, int, int]:
        conversion_stats.reset()
        zones = preview_zones(input_dir, options)
        duplicates = find_duplicate_clusters(zones)
        return len(zones), len({zone.key for zone in zones}), len(duplicates)

    async def scan_folder(
        self, input_dir: str, options: PackageOptions
    ) -> tuple[int, int, int] | None:
        """Map a sample folder without writing anything.

        Returns:
            tuple: (sample_count, key_count, duplicate_key_count), or None
            if the folder holds no usable samples
        """
        self.clear_debug_log()
        result = None
        try:
            result = await asyncio.to_thread(
                self._capture, self._scan, input_dir, options
            )
        except (ConversionError, OSError) as e:
            self.log(f"  -> {e}", "error")
        for filename, message in conversion_stats.warnings:
            self.log(f"  -> {filename}: {message}", "warning")
        return result

    def _build(
        self, input_dir: str, output_dir: str, options: PackageOptions
    ) -> ConversionStats:
        conversion_stats.reset()
        return build_package(input_dir, output_dir, options)

    async def build(
        self, input_dir: str, output_dir: str, options: PackageOptions
    ) -> ConversionStats | None:
        """Build the package in a worker thread.

        Returns:
            ConversionStats on success, None on error (already logged)
        """
        self.clear_debug_log()
        self.log(f"Building from {os.path.basename(input_dir)}/...", "info")
        try:
            stats = await asyncio.to_thread(
                self._capture, self._build, input_dir, output_dir, options
            )
        except ValidationError as e:
            self.log(f"  -> Invalid options: {e}", "error")
            return None
        except ConversionError as e:
            self.log(f"  -> Error: {e}", "error")
            return None
        except OSError as e:
            self.log(f"  -> I/O error: {e}", "error")
            return None

        for filename, message in stats.warnings:
            self.log(f"  -> {filename}: {message}", "warning")
        self.log("  -> Done", "success")
        return stats
