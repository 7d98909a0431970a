"""
GUI Bridge Tests

Exercises ConverterBridge and the option parsing helpers without a page.
"""

import asyncio

import pytest

pytest.importorskip("flet")

from gui.components.options_panel import parse_fade  # noqa: E402
from gui.converter import ConverterBridge  # noqa: E402
from mspack import PackageOptions  # noqa: E402


@pytest.fixture
def bridge():
    messages = []
    converter = ConverterBridge(lambda message, level: messages.append((level, message)))
    converter.messages = messages
    return converter


class TestParseFade:
    """Tests for parse_fade."""

    @pytest.mark.parametrize(
        "value, expected",
        [(None, 0), ("", 0), ("3", 3), ("12", 12), ("abc", 0), ("-4", 0)],
    )
    def test_values(self, value, expected):
        assert parse_fade(value) == expected


class TestConverterBridge:
    """Tests for ConverterBridge."""

    def test_scan_reports_duplicates(self, bridge, sample_dir):
        folder = sample_dir(["C3.wav", "C3-1.wav", "D3.wav", "C3.flac"])
        result = asyncio.run(bridge.scan_folder(str(folder), PackageOptions(name="Keys")))
        assert result == (3, 2, 1)
        assert ("warning", "  -> C3.flac: unsupported extension '.flac'") in bridge.messages
        assert "[SKIP] C3.flac" in bridge.get_debug_log()

    def test_scan_empty_folder(self, bridge, sample_dir):
        folder = sample_dir(["readme.txt"])
        result = asyncio.run(bridge.scan_folder(str(folder), PackageOptions(name="Keys")))
        assert result is None
        assert bridge.messages[-1][0] == "error"

    def test_build(self, bridge, sample_dir, tmp_path):
        folder = sample_dir(["C3.wav", "D3.wav"])
        out = tmp_path / "out"
        stats = asyncio.run(bridge.build(str(folder), str(out), PackageOptions(name="Keys")))
        assert stats is not None
        assert stats.zones_written == 2
        assert (out / "Keys.multisample").exists()
        assert ("success", "  -> Done") in bridge.messages
        assert "[2/2] D3.wav" in bridge.get_debug_log()

    def test_build_conflict_is_logged(self, bridge, sample_dir, tmp_path):
        folder = sample_dir(["C3.wav"])
        (tmp_path / "Keys.multisample").write_bytes(b"original")
        stats = asyncio.run(bridge.build(str(folder), str(tmp_path), PackageOptions(name="Keys")))
        assert stats is None
        assert bridge.messages[-1][0] == "error"
        assert (tmp_path / "Keys.multisample").read_bytes() == b"original"

    def test_build_invalid_options_is_logged(self, bridge, sample_dir, tmp_path):
        folder = sample_dir(["C3.wav"])
        stats = asyncio.run(bridge.build(str(folder), str(tmp_path), PackageOptions(name="")))
        assert stats is None
        assert bridge.messages[-1][1].startswith("  -> Invalid options")
