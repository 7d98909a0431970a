"""
Filename Parsing and Note Resolution Tests

Covers the sample name grammar, silent vs. warned rejections and the
note-to-key mapping.
"""

import pytest

from mspack import (
    NoteResolutionError,
    ParsedDescriptor,
    Rejected,
    ValueMode,
    midi_to_note_name,
    parse_sample_filename,
    resolve_key,
)


class TestParseSampleFilename:
    """Tests for parse_sample_filename."""

    def test_plain_note(self):
        desc = parse_sample_filename("C3.wav")
        assert isinstance(desc, ParsedDescriptor)
        assert desc.prefix == ""
        assert desc.note_letter == "C"
        assert desc.octave == 3
        assert desc.secondary_raw is None
        assert desc.secondary_group_tag == ""
        assert desc.extension == "wav"

    def test_absent_value_defaults_to_top(self):
        desc = parse_sample_filename("C3.wav")
        assert desc.secondary_value == 127

    def test_full_grammar(self):
        desc = parse_sample_filename("Piano F#4-100 soft.WAV")
        assert desc.full_name == "Piano F#4-100 soft.WAV"
        assert desc.prefix == "Piano "
        assert desc.note_letter == "F#"
        assert desc.octave == 4
        assert desc.secondary_raw == 100
        assert desc.secondary_group_tag == "100"
        assert desc.postfix == " soft"
        assert desc.extension == "WAV"

    def test_tag_keeps_raw_digits(self):
        desc = parse_sample_filename("C3-064.wav")
        assert desc.secondary_raw == 64
        assert desc.secondary_group_tag == "064"

    @pytest.mark.parametrize("ext", ["wav", "aif", "mp3", "ogg", "Wav", "OGG"])
    def test_allowed_extensions(self, ext):
        assert isinstance(parse_sample_filename(f"A2.{ext}"), ParsedDescriptor)

    @pytest.mark.parametrize("name", ["readme.txt", "x9.wav", "h3.wav", ".DS_Store", "C.wav"])
    def test_non_sample_names_rejected_silently(self, name):
        result = parse_sample_filename(name)
        assert isinstance(result, Rejected)
        assert result.reason is None

    def test_unsupported_extension_warns(self):
        result = parse_sample_filename("C3.flac")
        assert isinstance(result, Rejected)
        assert "flac" in result.reason

    def test_value_out_of_range_warns(self):
        result = parse_sample_filename("C3-200.wav")
        assert isinstance(result, Rejected)
        assert "out of range" in result.reason
        assert "velocity" in result.reason

    def test_out_of_range_message_names_mode(self):
        result = parse_sample_filename("C3-128.wav", ValueMode.SELECTION)
        assert "selection" in result.reason

    @pytest.mark.parametrize("value", [0, 1, 64, 127])
    def test_value_bounds_accepted(self, value):
        desc = parse_sample_filename(f"C3-{value}.wav")
        assert desc.secondary_raw == value

    def test_greedy_prefix_takes_last_note(self):
        """With two note-like tokens the prefix swallows the first one."""
        desc = parse_sample_filename("E3-100 B2.wav")
        assert desc.prefix == "E3-100 "
        assert desc.note_letter == "B"
        assert desc.octave == 2
        assert desc.secondary_raw is None

    def test_sharp_is_part_of_note(self):
        desc = parse_sample_filename("C#3.wav")
        assert desc.prefix == ""
        assert desc.note_letter == "C#"


class TestResolveKey:
    """Tests for resolve_key."""

    @pytest.mark.parametrize(
        "note, octave, expected",
        [
            ("C", 0, 12),
            ("C", 3, 48),
            ("D", 3, 50),
            ("C", 4, 60),
            ("A", 4, 69),
            ("B", 8, 119),
            ("G", 9, 127),
            ("c#", 4, 61),
        ],
    )
    def test_formula(self, note, octave, expected):
        assert resolve_key(note, octave) == expected

    def test_key_above_range_is_fatal(self):
        with pytest.raises(NoteResolutionError):
            resolve_key("G#", 9)

    def test_unknown_pitch_class_is_fatal(self):
        with pytest.raises(NoteResolutionError):
            resolve_key("H", 3)

    def test_note_name_round_trip(self):
        for key in range(12, 128):
            name = midi_to_note_name(key)
            desc = parse_sample_filename(f"{name}.wav")
            assert resolve_key(desc.note_letter, desc.octave) == key
