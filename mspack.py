#!/usr/bin/env python3
"""Multisample packer (.multisample).

Builds a Bitwig-style multisample package from a folder of pitch-named
samples. Pitch and a secondary value (velocity layer or selection band) are
read from each filename, mapped onto the full key/value range, and written
as multisample.xml plus the untouched sample files in one zip archive.

Usage: mspack.py <input-dir> [output-dir] [--name NAME] [--mode velocity|selection]

Copyright (c) 2025, mspack contributors
"""

import argparse
import enum
import os
import re
import sys
import tempfile
import zipfile
from collections import defaultdict
from dataclasses import dataclass, replace
from xml.sax.saxutils import escape

__version__ = "1.0.0"


# =============================================================================
# Constants
# =============================================================================

NOTE_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

ALLOWED_EXTENSIONS = ("wav", "aif", "mp3", "ogg")

KEY_MIN = 0
KEY_MAX = 127
VALUE_MIN = 0
VALUE_MAX = 127

DESCRIPTOR_NAME = "multisample.xml"
ARCHIVE_SUFFIX = ".multisample"

# Greedy prefix: with several note-like tokens in one name the last one wins,
# e.g. "E3-100 B2.wav" parses as B2 with prefix "E3-100 ".
SAMPLE_NAME_PATTERN = re.compile(
    r"^(?P<prefix>.*)"
    r"(?P<note>[A-G]#?)"
    r"(?P<octave>\d)"
    r"(?:-(?P<secondary>\d{1,3}))?"
    r"(?P<postfix>.*)"
    r"\.(?P<extension>[^.]+)$"
)

# Fixed-point formats expected by the consuming sampler
GAIN_FORMAT = "{:.2f}"
TUNE_FORMAT = "{:.2f}"
TRACK_FORMAT = "{:.4f}"
LOOP_FADE_FORMAT = "{:.4f}"
POSITION_FORMAT = "{:.3f}"


# =============================================================================
# Exceptions
# =============================================================================


class ConversionError(Exception):
    """Base class for errors that abort a packaging run."""


class NoteResolutionError(ConversionError):
    """A note token resolved to an unknown pitch class or an out-of-range key."""


class NoSamplesError(ConversionError):
    """No usable sample names were found."""


class ArchiveExistsError(ConversionError):
    """The target archive already exists."""


class ValidationError(ValueError):
    """Invalid packaging options."""


# =============================================================================
# Data Model
# =============================================================================


class ValueMode(enum.Enum):
    """Which secondary dimension the filename value drives."""

    VELOCITY = "velocity"
    SELECTION = "selection"


@dataclass(frozen=True)
class ParsedDescriptor:
    """A sample filename split into its grammar parts."""

    full_name: str
    prefix: str
    note_letter: str
    octave: int
    secondary_raw: int | None
    secondary_group_tag: str
    postfix: str
    extension: str

    @property
    def secondary_value(self) -> int:
        """Parsed secondary value, or the top of the range when absent."""
        if self.secondary_raw is None:
            return VALUE_MAX
        return self.secondary_raw


@dataclass(frozen=True)
class Rejected:
    """A filename that is not a usable sample.

    A reason of None means the name simply is not a sample name and the
    rejection should stay silent.
    """

    filename: str
    reason: str | None = None


@dataclass(frozen=True)
class Zone:
    """One sample entry of the multisample descriptor."""

    source_name: str
    key: int
    low_key: int = KEY_MIN
    high_key: int = KEY_MAX
    velocity_min: int = VALUE_MIN
    velocity_max: int = VALUE_MAX
    selection_min: int = VALUE_MIN
    selection_max: int = VALUE_MAX
    secondary_group_tag: str = ""
    key_low_fade: int = 0
    key_high_fade: int = 0
    velocity_low_fade: int = 0
    velocity_high_fade: int = 0
    selection_low_fade: int = 0
    selection_high_fade: int = 0
    redistributed: bool = False


@dataclass
class PackageOptions:
    """Everything the packaging pipeline needs besides the input folder."""

    name: str
    author: str = ""
    key_fade: int = 0
    mode: ValueMode = ValueMode.VELOCITY
    secondary_fade: int = 0
    redistribute_fade: int | None = None
    compress: bool = True

    def validate(self):
        """Raise ValidationError if any option is unusable."""
        if not self.name or not self.name.strip():
            raise ValidationError("Instrument name must not be empty")
        if os.sep in self.name or (os.altsep and os.altsep in self.name):
            raise ValidationError(f"Instrument name must not contain a path: {self.name}")
        fades = {
            "key fade": self.key_fade,
            "secondary fade": self.secondary_fade,
            "redistribute fade": self.redistribute_fade,
        }
        for label, value in fades.items():
            if value is not None and value < 0:
                raise ValidationError(f"The {label} must not be negative: {value}")
        if not isinstance(self.mode, ValueMode):
            raise ValidationError(f"Unknown value mode: {self.mode!r}")


# =============================================================================
# Conversion Statistics
# =============================================================================


class ConversionStats:
    """Collects statistics and warnings during packaging."""

    def __init__(self):
        self.reset()

    def reset(self):
        """Reset all statistics."""
        # File counts
        self.files_scanned = 0
        self.samples_accepted = 0
        self.samples_rejected = 0

        # Mapping
        self.zones_written = 0
        self.key_groups = 0
        self.duplicate_keys = 0
        self.redistributed_zones = 0
        self.redistribute_fade = None

        # Output
        self.archive_path = None
        self.archive_bytes = 0

        # Warnings: list of (filename, message)
        self.warnings = []

    def add_warning(self, filename, message):
        """Add a warning with associated filename."""
        self.warnings.append((filename, message))

    def print_summary(self, settings=None):
        """Print packaging summary."""
        print("\n" + "=" * 50)
        print("PACKAGING SUMMARY")
        print("=" * 50)

        if settings:
            print("\n--- Settings ---")
            print(f"Mode: {settings['mode'].value}")
            print(f"Key fade: {settings.get('key_fade', 0)}")
            print(f"Secondary fade: {settings.get('secondary_fade', 0)}")
            if settings.get("redistribute_fade") is not None:
                print(f"Redistribute: Yes (fade: {settings['redistribute_fade']})")
            else:
                print("Redistribute: No")
            print(f"Compression: {'Yes' if settings.get('compress', True) else 'No'}")

        print("\n--- Statistics ---")
        print(f"Files scanned: {self.files_scanned}")
        print(f"Samples accepted: {self.samples_accepted}", end="")
        if self.samples_rejected > 0:
            print(f" (rejected: {self.samples_rejected})")
        else:
            print()
        print(f"Key groups: {self.key_groups}")
        print(f"Zones written: {self.zones_written}")
        if self.duplicate_keys > 0:
            print(f"  Keys with several samples: {self.duplicate_keys}")
        if self.redistributed_zones > 0:
            print(f"  Redistributed zones: {self.redistributed_zones}")
        if self.archive_path:
            print(f"Archive: {self.archive_path} ({self.archive_bytes:,} bytes)")

        if self.warnings:
            print(f"\n--- Warnings ({len(self.warnings)}) ---")
            for filename, message in self.warnings:
                print(f"  - {filename}: {message}")
        else:
            print("\n--- No warnings ---")

        print("=" * 50)


# Global stats instance
conversion_stats = ConversionStats()


# =============================================================================
# Filename Parsing
# =============================================================================


def parse_sample_filename(filename, mode=ValueMode.VELOCITY):
    """Split a sample filename into prefix, note, octave and secondary value.

    Args:
        filename: Bare file name (no directory)
        mode: Value mode, only used to word the out-of-range warning

    Returns:
        ParsedDescriptor on success, Rejected otherwise
    """
    match = SAMPLE_NAME_PATTERN.match(filename)
    if not match:
        return Rejected(filename)

    extension = match.group("extension")
    if extension.lower() not in ALLOWED_EXTENSIONS:
        return Rejected(filename, f"unsupported extension '.{extension}'")

    try:
        octave = int(match.group("octave"))
    except ValueError:
        return Rejected(filename, f"invalid octave '{match.group('octave')}'")

    tag = match.group("secondary") or ""
    secondary = None
    if tag:
        try:
            secondary = int(tag)
        except ValueError:
            return Rejected(filename, f"invalid {mode.value} value '{tag}'")
        if not VALUE_MIN <= secondary <= VALUE_MAX:
            return Rejected(
                filename,
                f"{mode.value} value {secondary} out of range "
                f"({VALUE_MIN}-{VALUE_MAX})",
            )

    return ParsedDescriptor(
        full_name=filename,
        prefix=match.group("prefix"),
        note_letter=match.group("note"),
        octave=octave,
        secondary_raw=secondary,
        secondary_group_tag=tag,
        postfix=match.group("postfix"),
        extension=extension,
    )


# =============================================================================
# Note Resolution
# =============================================================================


def resolve_key(note_letter, octave):
    """Convert a note letter and filename octave to a MIDI key number.

    Octave 0 in a filename is synthesizer octave 1, so C0 is key 12 and
    C4 is key 60.

    Raises:
        NoteResolutionError: Unknown pitch class or key outside 0-127
    """
    note = note_letter.upper()
    if note not in NOTE_NAMES:
        raise NoteResolutionError(f"Unknown pitch class: {note_letter!r}")

    key = (1 + octave) * 12 + NOTE_NAMES.index(note)
    if not KEY_MIN <= key <= KEY_MAX:
        raise NoteResolutionError(
            f"{note_letter}{octave} resolves to key {key}, outside {KEY_MIN}-{KEY_MAX}"
        )
    return key


def midi_to_note_name(midi_note):
    """Convert MIDI note number to a filename-style note name (60 -> C4)."""
    return f"{NOTE_NAMES[midi_note % 12]}{midi_note // 12 - 1}"


# =============================================================================
# Zone Assignment
# =============================================================================


def _active_range(zone, mode):
    if mode is ValueMode.VELOCITY:
        return zone.velocity_min, zone.velocity_max
    return zone.selection_min, zone.selection_max


def _with_active(zone, mode, low, high, low_fade=0, high_fade=0):
    if mode is ValueMode.VELOCITY:
        return replace(
            zone,
            velocity_min=low,
            velocity_max=high,
            velocity_low_fade=low_fade,
            velocity_high_fade=high_fade,
        )
    return replace(
        zone,
        selection_min=low,
        selection_max=high,
        selection_low_fade=low_fade,
        selection_high_fade=high_fade,
    )


def _settle_fades(low, high, low_fade, high_fade, lower=VALUE_MIN, upper=VALUE_MAX):
    """Cap fades at half the range width and drop them at the outer edges."""
    cap = abs(high - low) // 2
    low_fade = 0 if low == lower else min(low_fade, cap)
    high_fade = 0 if high == upper else min(high_fade, cap)
    return low_fade, high_fade


def group_by_key(descriptors):
    """Group parsed descriptors by resolved key, ascending.

    Raises:
        NoteResolutionError: If any descriptor has an unresolvable note
    """
    groups = defaultdict(list)
    for desc in descriptors:
        groups[resolve_key(desc.note_letter, desc.octave)].append(desc)
    return dict(sorted(groups.items()))


def assign_bands(key, descriptors, mode):
    """Give each duplicate cluster of one key a contiguous band of the active dimension.

    Clusters are the descriptors sharing a secondary group tag, ordered by
    their first member's value. Each band runs from just above the previous
    band up to the cluster's value; the topmost band always ends at 127.
    Clusters with equal values share a band. The inactive dimension stays
    at the full range.

    Returns:
        list[Zone] for this key
    """
    clusters = defaultdict(list)
    for desc in descriptors:
        clusters[desc.secondary_group_tag].append(desc)

    ordered = sorted(
        clusters.items(), key=lambda item: (item[1][0].secondary_value, item[0])
    )
    top_value = ordered[-1][1][0].secondary_value

    zones = []
    running_min = VALUE_MIN
    band_low = VALUE_MIN
    previous_value = None
    for tag, members in ordered:
        value = members[0].secondary_value
        if value != previous_value:
            band_low = running_min
            running_min = value + 1
            previous_value = value
        band_high = VALUE_MAX if value == top_value else value

        for desc in sorted(members, key=lambda d: d.full_name):
            zone = Zone(source_name=desc.full_name, key=key, secondary_group_tag=tag)
            zones.append(_with_active(zone, mode, band_low, band_high))
    return zones


def split_key_ranges(keys):
    """Midpoint-split the key range 0-127 between sorted distinct root keys.

    The first range starts at 0 and the last ends at 127. Interior
    boundaries use floor division on both sides, so the keys between two
    roots go to the lower root on a tie. A neighbour one semitone away
    keeps its own key.

    Returns:
        list of (low, high) tuples, one per key
    """
    bounds = []
    last = len(keys) - 1
    for i, key in enumerate(keys):
        if i == 0:
            low = KEY_MIN
        else:
            low = max(KEY_MIN, key - (key - keys[i - 1]) // 2 + 1)
        if i == last:
            high = KEY_MAX
        else:
            high = min(KEY_MAX, key + (keys[i + 1] - key + 1) // 2)
        bounds.append([low, high])

    for i in range(1, len(bounds)):
        if bounds[i][0] > keys[i]:
            bounds[i][0] = keys[i]
            bounds[i - 1][1] = keys[i] - 1

    return [(low, high) for low, high in bounds]


def assign_key_ranges(zones, mode):
    """Partition the key range among zones sharing an active-dimension band.

    Zones are grouped by the upper bound of their active band; within each
    group the distinct keys split 0-127 between them (split_key_ranges) and
    zones on the same key share its range.
    """
    bands = defaultdict(lambda: defaultdict(list))
    for zone in zones:
        bands[_active_range(zone, mode)[1]][zone.key].append(zone)

    ranged = []
    for band_id in sorted(bands):
        by_key = bands[band_id]
        keys = sorted(by_key)
        for key, (low, high) in zip(keys, split_key_ranges(keys)):
            for zone in by_key[key]:
                ranged.append(replace(zone, low_key=low, high_key=high))
    return ranged


def apply_key_fade(zones, key_fade):
    """Record key fades, then widen each key range by the fade width.

    Fade widths come from the distance between the root key and the
    unwidened boundary, and are 0 at key 0 and key 127.
    """
    faded = []
    for zone in zones:
        low_fade = 0
        if zone.low_key != KEY_MIN:
            low_fade = min(key_fade, abs(zone.key - zone.low_key))
        high_fade = 0
        if zone.high_key != KEY_MAX:
            high_fade = min(key_fade, abs(zone.high_key - zone.key))

        low_key = max(KEY_MIN, zone.low_key - key_fade)
        high_key = min(KEY_MAX, zone.high_key + key_fade)
        low_fade, high_fade = _settle_fades(
            low_key, high_key, low_fade, high_fade, KEY_MIN, KEY_MAX
        )
        faded.append(
            replace(
                zone,
                low_key=low_key,
                high_key=high_key,
                key_low_fade=low_fade,
                key_high_fade=high_fade,
            )
        )
    return faded


def apply_secondary_fade(zones, mode, secondary_fade):
    """Fade and widen the active band, like apply_key_fade.

    Fade widths are capped at half the band width.
    """
    faded = []
    for zone in zones:
        low, high = _active_range(zone, mode)
        cap = abs(high - low) // 2
        low_fade = 0 if low == VALUE_MIN else min(secondary_fade, cap)
        high_fade = 0 if high == VALUE_MAX else min(secondary_fade, cap)

        low = max(VALUE_MIN, low - secondary_fade)
        high = min(VALUE_MAX, high + secondary_fade)
        low_fade, high_fade = _settle_fades(low, high, low_fade, high_fade)
        faded.append(_with_active(zone, mode, low, high, low_fade, high_fade))
    return faded


def find_duplicate_clusters(zones):
    """Count zones per key, keeping only keys shared by several zones.

    Returns:
        dict: key -> number of zones on that key
    """
    counts = defaultdict(int)
    for zone in zones:
        counts[zone.key] += 1
    return {key: count for key, count in sorted(counts.items()) if count > 1}


def even_band(position, count):
    """Return the (low, high) selection band for slot `position` of `count`."""
    low = min(VALUE_MAX, position * (VALUE_MAX + 1) // count)
    high = (position + 1) * (VALUE_MAX + 1) // count - 1
    return low, max(low, high)


def redistribute_duplicates(zones, redistribute_fade):
    """Spread the zones of each shared key evenly over the selection range.

    Each cluster of N zones on one key gets N equal selection bands, in
    velocity order, each widened by redistribute_fade. The members then
    cover the full velocity range without velocity fades. Key ranges are
    left alone.
    """
    clusters = defaultdict(list)
    for index, zone in enumerate(zones):
        clusters[zone.key].append(index)

    redistributed = list(zones)
    for indices in clusters.values():
        count = len(indices)
        if count < 2:
            continue
        ordered = sorted(
            indices,
            key=lambda i: (zones[i].velocity_min, zones[i].source_name),
        )
        for position, index in enumerate(ordered):
            low, high = even_band(position, count)
            cap = (high - low) // 2
            low_fade = 0 if low == VALUE_MIN else min(redistribute_fade, cap)
            high_fade = 0 if high == VALUE_MAX else min(redistribute_fade, cap)

            low = max(VALUE_MIN, low - redistribute_fade)
            high = min(VALUE_MAX, high + redistribute_fade)
            low_fade, high_fade = _settle_fades(low, high, low_fade, high_fade)
            redistributed[index] = replace(
                zones[index],
                selection_min=low,
                selection_max=high,
                selection_low_fade=low_fade,
                selection_high_fade=high_fade,
                velocity_min=VALUE_MIN,
                velocity_max=VALUE_MAX,
                velocity_low_fade=0,
                velocity_high_fade=0,
                redistributed=True,
            )
    return redistributed


def assign_zones(
    descriptors,
    mode=ValueMode.VELOCITY,
    key_fade=0,
    secondary_fade=0,
    redistribute_fade=None,
):
    """Map parsed descriptors onto key and secondary ranges.

    Args:
        descriptors: ParsedDescriptor list
        mode: Which secondary dimension the filename values drive
        key_fade: Key crossfade width (keys)
        secondary_fade: Crossfade width of the active dimension
        redistribute_fade: Spread shared keys over the selection range
            with this fade (velocity mode only, None = off)

    Returns:
        list[Zone] ordered by key, active band and source name

    Raises:
        NoSamplesError: If descriptors is empty
        NoteResolutionError: If a note cannot be resolved
    """
    if not descriptors:
        raise NoSamplesError("No valid samples to map")

    key_fade = int(key_fade)
    secondary_fade = int(secondary_fade)

    zones = []
    for key, members in group_by_key(descriptors).items():
        zones.extend(assign_bands(key, members, mode))

    zones = assign_key_ranges(zones, mode)
    zones = apply_key_fade(zones, key_fade)
    zones = apply_secondary_fade(zones, mode, secondary_fade)

    if redistribute_fade is not None and mode is ValueMode.VELOCITY:
        zones = redistribute_duplicates(zones, int(redistribute_fade))

    return sorted(
        zones, key=lambda z: (z.key, _active_range(z, mode)[0], z.source_name)
    )


# =============================================================================
# Descriptor Serialization
# =============================================================================


def _attr(value):
    return escape(str(value), {'"': "&quot;"})


def render_multisample(
    name,
    author,
    zones,
    key_fade,
    mode,
    secondary_fade,
    redistribute_fade=None,
):
    """Render zones as a multisample.xml document.

    Velocity fades are written only in velocity mode, selection fades only
    in selection mode or for redistributed zones.

    Returns:
        str: Complete XML document, newline terminated
    """
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<multisample name="{_attr(name)}">',
        "    <generator>Bitwig Studio</generator>",
        "    <category></category>",
        f"    <creator>{escape(author)}</creator>",
        "    <description></description>",
        "    <keywords></keywords>",
    ]

    for zone in zones:
        key_fades = (zone.key_low_fade, zone.key_high_fade) if key_fade else (0, 0)

        velocity_fades = (0, 0)
        if mode is ValueMode.VELOCITY and secondary_fade:
            velocity_fades = (zone.velocity_low_fade, zone.velocity_high_fade)

        selection_fades = (0, 0)
        if (mode is ValueMode.SELECTION and secondary_fade) or (
            redistribute_fade is not None and zone.redistributed
        ):
            selection_fades = (zone.selection_low_fade, zone.selection_high_fade)

        active_max = _active_range(zone, mode)[1]
        lines.append(
            f'    <sample file="{_attr(zone.source_name)}"'
            f' gain="{GAIN_FORMAT.format(0)}"'
            f' parameter-1="{zone.key}"'
            f' parameter-2="{active_max}"'
            f' parameter-3="0"'
            f' reverse="false"'
            f' sample-start="{POSITION_FORMAT.format(0)}"'
            f' sample-stop="{POSITION_FORMAT.format(0)}"'
            f' zone-logic="always-play">'
        )
        lines.append(
            f'        <key low="{zone.low_key}" high="{zone.high_key}"'
            f' root="{zone.key}" track="{TRACK_FORMAT.format(1)}"'
            f' tune="{TUNE_FORMAT.format(0)}"'
            f' low-fade="{key_fades[0]}" high-fade="{key_fades[1]}"/>'
        )
        lines.append(
            f'        <velocity low="{zone.velocity_min}" high="{zone.velocity_max}"'
            f' low-fade="{velocity_fades[0]}" high-fade="{velocity_fades[1]}"/>'
        )
        lines.append(
            f'        <select low="{zone.selection_min}" high="{zone.selection_max}"'
            f' low-fade="{selection_fades[0]}" high-fade="{selection_fades[1]}"/>'
        )
        lines.append(
            f'        <loop fade="{LOOP_FADE_FORMAT.format(0)}" mode="off"'
            f' start="{POSITION_FORMAT.format(0)}"/>'
        )
        lines.append("    </sample>")

    lines.append("</multisample>")
    return "\n".join(lines) + "\n"


# =============================================================================
# Package Writing
# =============================================================================


class PackageWriter:
    """Writes one .multisample zip archive.

    The archive is assembled in a temporary file next to the target and
    moved into place only once complete.
    """

    # Fixed timestamp so identical input gives identical archives
    ENTRY_DATE_TIME = (1980, 1, 1, 0, 0, 0)

    def __init__(self, archive_path):
        self.archive_path = archive_path

    def exists(self):
        return os.path.exists(self.archive_path)

    def read_bytes(self, path):
        with open(path, "rb") as f:
            return f.read()

    def write_archive(self, entries):
        """Write all entries to the archive.

        Args:
            entries: Iterable of (name, data, compress) tuples

        Returns:
            dict: archive_path, entries (count), size (bytes)

        Raises:
            ArchiveExistsError: If the target exists; nothing is written
        """
        if self.exists():
            raise ArchiveExistsError(f"Archive already exists: {self.archive_path}")

        directory = os.path.dirname(os.path.abspath(self.archive_path))
        os.makedirs(directory, exist_ok=True)

        with tempfile.NamedTemporaryFile(
            mode="wb", suffix=ARCHIVE_SUFFIX, dir=directory, delete=False
        ) as tmp:
            tmp_path = tmp.name

        count = 0
        try:
            with zipfile.ZipFile(tmp_path, "w") as archive:
                for name, data, compress in entries:
                    info = zipfile.ZipInfo(name, date_time=self.ENTRY_DATE_TIME)
                    info.compress_type = (
                        zipfile.ZIP_DEFLATED if compress else zipfile.ZIP_STORED
                    )
                    info.external_attr = 0o644 << 16
                    archive.writestr(info, data)
                    count += 1

            # link fails if the target appeared while we were writing
            try:
                os.link(tmp_path, self.archive_path)
            except FileExistsError:
                raise ArchiveExistsError(
                    f"Archive already exists: {self.archive_path}"
                ) from None
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

        return {
            "archive_path": self.archive_path,
            "entries": count,
            "size": os.path.getsize(self.archive_path),
        }


# =============================================================================
# Pipeline
# =============================================================================


def scan_directory(input_dir, mode=ValueMode.VELOCITY):
    """Parse every file name in input_dir.

    Non-sample names are skipped silently; names that look like samples but
    cannot be used are reported and recorded as warnings.

    Returns:
        list[ParsedDescriptor] in file name order
    """
    descriptors = []
    for filename in sorted(os.listdir(input_dir)):
        if not os.path.isfile(os.path.join(input_dir, filename)):
            continue
        conversion_stats.files_scanned += 1

        result = parse_sample_filename(filename, mode)
        if isinstance(result, Rejected):
            if result.reason:
                print(f"  [SKIP] {filename}: {result.reason}")
                conversion_stats.add_warning(filename, result.reason)
                conversion_stats.samples_rejected += 1
            continue
        descriptors.append(result)

    conversion_stats.samples_accepted += len(descriptors)
    return descriptors


def preview_zones(input_dir, options):
    """Scan input_dir and map it without writing anything.

    Returns:
        list[Zone]
    """
    descriptors = scan_directory(input_dir, options.mode)
    if not descriptors:
        raise NoSamplesError(f"No valid samples found in {input_dir}")
    return assign_zones(
        descriptors,
        options.mode,
        options.key_fade,
        options.secondary_fade,
        options.redistribute_fade,
    )


def format_zone_table(zones, mode):
    """Format zones as a fixed-width text table."""
    header = (
        f"{'Sample':<32} {'Root':>5} {'Keys':>9} {'Vel':>9} {'Sel':>9} {'Fades (k/v/s)':>18}"
    )
    rows = [header, "-" * len(header)]
    for zone in zones:
        fades = (
            f"{zone.key_low_fade}/{zone.key_high_fade} "
            f"{zone.velocity_low_fade}/{zone.velocity_high_fade} "
            f"{zone.selection_low_fade}/{zone.selection_high_fade}"
        )
        rows.append(
            f"{zone.source_name[:32]:<32} "
            f"{midi_to_note_name(zone.key):>5} "
            f"{zone.low_key:>4}-{zone.high_key:<4} "
            f"{zone.velocity_min:>4}-{zone.velocity_max:<4} "
            f"{zone.selection_min:>4}-{zone.selection_max:<4} "
            f"{fades:>18}"
        )
    rows.append(f"{len(zones)} zone(s), mode: {mode.value}")
    return "\n".join(rows)


def build_package(input_dir, output_dir, options, writer=None):
    """Build <output_dir>/<name>.multisample from the samples in input_dir.

    Args:
        input_dir: Folder holding the samples
        output_dir: Folder receiving the archive
        options: PackageOptions
        writer: PackageWriter to use (default: one for the target path)

    Returns:
        ConversionStats: The global stats, filled in

    Raises:
        ValidationError: Bad options
        ArchiveExistsError: Target archive exists; nothing is written
        NoSamplesError: No usable sample names
        NoteResolutionError: A note resolves outside the key range
    """
    options.validate()

    archive_path = os.path.join(output_dir, f"{options.name}{ARCHIVE_SUFFIX}")
    if writer is None:
        writer = PackageWriter(archive_path)
    if writer.exists():
        raise ArchiveExistsError(f"Archive already exists: {archive_path}")

    print(f"Scanning: {input_dir}")
    descriptors = scan_directory(input_dir, options.mode)
    if not descriptors:
        raise NoSamplesError(f"No valid samples found in {input_dir}")
    print(f"Found {len(descriptors)} sample(s)")

    redistribute_fade = options.redistribute_fade
    if redistribute_fade is not None and options.mode is not ValueMode.VELOCITY:
        print("  Warning: redistribution only applies in velocity mode, ignored")
        conversion_stats.add_warning(options.name, "redistribution ignored")
        redistribute_fade = None

    zones = assign_zones(
        descriptors,
        options.mode,
        options.key_fade,
        options.secondary_fade,
        redistribute_fade,
    )

    duplicates = find_duplicate_clusters(zones)
    if redistribute_fade is not None and not duplicates:
        print("  Warning: no key has several samples, nothing to redistribute")
        conversion_stats.add_warning(options.name, "nothing to redistribute")
        redistribute_fade = None

    conversion_stats.key_groups = len({zone.key for zone in zones})
    conversion_stats.duplicate_keys = len(duplicates)
    conversion_stats.redistributed_zones = sum(1 for z in zones if z.redistributed)
    conversion_stats.redistribute_fade = redistribute_fade

    print(f"\nGenerating: {DESCRIPTOR_NAME}")
    descriptor = render_multisample(
        options.name,
        options.author,
        zones,
        options.key_fade,
        options.mode,
        options.secondary_fade,
        redistribute_fade,
    )

    entries = [(DESCRIPTOR_NAME, descriptor.encode("utf-8"), options.compress)]
    print("\nAdding samples...")
    for i, zone in enumerate(zones, 1):
        print(f"  [{i}/{len(zones)}] {zone.source_name}")
        data = writer.read_bytes(os.path.join(input_dir, zone.source_name))
        entries.append((zone.source_name, data, options.compress))

    result = writer.write_archive(entries)
    print(f"\nWritten: {result['archive_path']}")

    conversion_stats.zones_written = len(zones)
    conversion_stats.archive_path = result["archive_path"]
    conversion_stats.archive_bytes = result["size"]
    return conversion_stats


# =============================================================================
# Main Entry Point
# =============================================================================


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Build a .multisample package from a folder of pitch-named samples.",
        epilog=(
            "Sample names: <prefix><note><octave>[-<value>]<postfix>.<ext>, "
            "e.g. 'Piano C3-64.wav'. Extensions: wav, aif, mp3, ogg."
        ),
    )
    parser.add_argument(
        "input_dir",
        metavar="INPUT_DIR",
        help="Folder containing the samples",
    )
    parser.add_argument(
        "output_dir",
        metavar="OUTPUT_DIR",
        nargs="?",
        default=".",
        help="Folder for the .multisample archive (default: current folder)",
    )
    parser.add_argument(
        "--name",
        "-n",
        default=None,
        help="Instrument and archive name (default: input folder name)",
    )
    parser.add_argument(
        "--author",
        "-a",
        default="",
        help="Creator written into the descriptor",
    )
    parser.add_argument(
        "--mode",
        "-m",
        choices=[mode.value for mode in ValueMode],
        default=ValueMode.VELOCITY.value,
        help="Dimension driven by the number after the octave (default: velocity)",
    )
    parser.add_argument(
        "--key-fade",
        type=int,
        default=0,
        metavar="N",
        help="Key crossfade width in semitones (default: 0)",
    )
    parser.add_argument(
        "--secondary-fade",
        type=int,
        default=0,
        metavar="N",
        help="Velocity/selection crossfade width (default: 0)",
    )
    parser.add_argument(
        "--redistribute-fade",
        type=int,
        default=None,
        metavar="N",
        help="Spread samples sharing a key evenly over the selection range, "
        "with this fade (velocity mode only)",
    )
    parser.add_argument(
        "--no-compress",
        action="store_true",
        help="Store files in the archive without compression",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the zone map without writing an archive",
    )

    args = parser.parse_args(argv)

    if not os.path.isdir(args.input_dir):
        print(f"Error: INPUT_DIR is not a directory: {args.input_dir}")
        sys.exit(1)
    if os.path.isfile(args.output_dir):
        print(f"Error: OUTPUT_DIR is a file, not a directory: {args.output_dir}")
        sys.exit(1)

    name = args.name
    if name is None:
        name = os.path.basename(os.path.normpath(os.path.abspath(args.input_dir)))

    options = PackageOptions(
        name=name,
        author=args.author,
        key_fade=args.key_fade,
        mode=ValueMode(args.mode),
        secondary_fade=args.secondary_fade,
        redistribute_fade=args.redistribute_fade,
        compress=not args.no_compress,
    )

    conversion_stats.reset()

    try:
        if args.dry_run:
            options.validate()
            zones = preview_zones(args.input_dir, options)
            print(format_zone_table(zones, options.mode))
            return
        build_package(args.input_dir, args.output_dir, options)
    except ValidationError as e:
        print(f"Error: {e}")
        sys.exit(1)
    except ConversionError as e:
        print(f"Error: {e}")
        sys.exit(1)

    settings = {
        "mode": options.mode,
        "key_fade": options.key_fade,
        "secondary_fade": options.secondary_fade,
        "redistribute_fade": conversion_stats.redistribute_fade,
        "compress": options.compress,
    }
    conversion_stats.print_summary(settings)


if __name__ == "__main__":
    main()
