"""
Descriptor Serialization Tests

Checks the multisample.xml layout, fixed-point formatting and which fades
are written in each mode.
"""

import xml.etree.ElementTree as ET

from mspack import (
    ParsedDescriptor,
    ValueMode,
    assign_zones,
    parse_sample_filename,
    render_multisample,
)


def parse(*names):
    return [parse_sample_filename(name) for name in names]


def render(names, mode=ValueMode.VELOCITY, key_fade=0, secondary_fade=0, redistribute_fade=None):
    zones = assign_zones(parse(*names), mode, key_fade, secondary_fade, redistribute_fade)
    return render_multisample(
        "Keys", "me", zones, key_fade, mode, secondary_fade, redistribute_fade
    )


def samples_by_file(text):
    root = ET.fromstring(text.encode("utf-8"))
    return {sample.get("file"): sample for sample in root.findall("sample")}


class TestDocumentLayout:
    """Tests for the document structure."""

    def test_header(self):
        text = render(["C3.wav", "D3.wav"])
        assert text.startswith('<?xml version="1.0" encoding="UTF-8"?>\n')
        assert text.endswith("</multisample>\n")

        root = ET.fromstring(text.encode("utf-8"))
        assert root.tag == "multisample"
        assert root.get("name") == "Keys"
        assert root.findtext("generator") == "Bitwig Studio"
        assert root.findtext("creator") == "me"
        for field in ("category", "description", "keywords"):
            assert root.find(field) is not None

    def test_one_sample_element_per_zone(self):
        samples = samples_by_file(render(["C3.wav", "D3.wav", "D3-40.wav"]))
        assert set(samples) == {"C3.wav", "D3.wav", "D3-40.wav"}

    def test_sample_attributes(self):
        sample = samples_by_file(render(["C3.wav", "D3.wav"]))["C3.wav"]
        assert sample.get("gain") == "0.00"
        assert sample.get("parameter-1") == "48"
        assert sample.get("parameter-2") == "127"
        assert sample.get("parameter-3") == "0"
        assert sample.get("reverse") == "false"
        assert sample.get("sample-start") == "0.000"
        assert sample.get("sample-stop") == "0.000"
        assert sample.get("zone-logic") == "always-play"

    def test_nested_ranges(self):
        sample = samples_by_file(render(["C3.wav", "D3.wav"]))["C3.wav"]
        key = sample.find("key")
        assert key.attrib == {
            "low": "0",
            "high": "49",
            "root": "48",
            "track": "1.0000",
            "tune": "0.00",
            "low-fade": "0",
            "high-fade": "0",
        }
        velocity = sample.find("velocity")
        assert (velocity.get("low"), velocity.get("high")) == ("0", "127")
        select = sample.find("select")
        assert (select.get("low"), select.get("high")) == ("0", "127")
        loop = sample.find("loop")
        assert loop.attrib == {"fade": "0.0000", "mode": "off", "start": "0.000"}

    def test_escaping(self):
        zones = assign_zones(parse("A & B C3.wav"))
        text = render_multisample('Big "Piano" & Co', "<anon>", zones, 0, ValueMode.VELOCITY, 0)
        assert 'name="Big &quot;Piano&quot; &amp; Co"' in text
        assert "<creator>&lt;anon&gt;</creator>" in text
        root = ET.fromstring(text.encode("utf-8"))
        assert root.get("name") == 'Big "Piano" & Co'
        assert root.find("sample").get("file") == "A & B C3.wav"


class TestFadeOutput:
    """Tests for which fades are written."""

    def test_key_fades(self):
        samples = samples_by_file(render(["C3.wav", "C4.wav"], key_fade=3))
        assert samples["C3.wav"].find("key").get("high-fade") == "3"
        assert samples["C4.wav"].find("key").get("low-fade") == "3"

    def test_velocity_fades_in_velocity_mode(self):
        samples = samples_by_file(render(["C3-64.wav", "C3.wav"], secondary_fade=10))
        assert samples["C3-64.wav"].find("velocity").get("high-fade") == "10"
        assert samples["C3-64.wav"].find("select").get("high-fade") == "0"
        assert samples["C3-64.wav"].get("parameter-2") == "74"

    def test_selection_fades_in_selection_mode(self):
        samples = samples_by_file(
            render(["C3-64.wav", "C3.wav"], mode=ValueMode.SELECTION, secondary_fade=4)
        )
        assert samples["C3-64.wav"].find("select").get("high-fade") == "4"
        assert samples["C3-64.wav"].find("velocity").get("high-fade") == "0"

    def test_redistributed_selection_fades(self):
        samples = samples_by_file(render(["C3.wav", "C3-1.wav"], redistribute_fade=4))
        first = samples["C3-1.wav"].find("select")
        assert (first.get("low"), first.get("high")) == ("0", "67")
        assert first.get("high-fade") == "4"


class TestDeterminism:
    """Identical input gives identical output."""

    def test_repeatable(self):
        names = ["C3.wav", "E3-64.wav", "E3.wav", "G3.wav", "G3-1.wav"]
        assert render(names, key_fade=2, secondary_fade=3, redistribute_fade=1) == render(
            list(reversed(names)), key_fade=2, secondary_fade=3, redistribute_fade=1
        )

    def test_rejected_names_never_referenced(self):
        names = ["C3.wav", "C3.flac", "x9.wav", "C3-300.wav"]
        parsed = [parse_sample_filename(name) for name in names]
        descriptors = [d for d in parsed if isinstance(d, ParsedDescriptor)]
        zones = assign_zones(descriptors)
        text = render_multisample("Keys", "", zones, 0, ValueMode.VELOCITY, 0)
        assert set(samples_by_file(text)) == {"C3.wav"}
