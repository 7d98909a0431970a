"""Localization strings for GUI.

All user-facing strings are centralized here for future localization.
"""


class Strings:
    """Centralized strings for the GUI."""

    # Window
    APP_TITLE = "Multisample Packer"

    # Output section
    OUTPUT_FOLDER = "OUTPUT FOLDER"
    OUTPUT_HINT = "Select output folder first"
    BROWSE = "Browse"
    ARCHIVE_EXISTS_WARNING = (
        "Warning: {name} already exists in the output folder and will not be overwritten."
    )

    # Options section
    OPTIONS = "OPTIONS"
    NAME_LABEL = "Name"
    NAME_HINT = "Instrument name (default: folder name)"
    AUTHOR_LABEL = "Author"
    MODE_LABEL = "Number after octave sets"
    MODE_VELOCITY = "Velocity"
    MODE_SELECTION = "Selection"
    KEY_FADE_LABEL = "Key fade"
    SECONDARY_FADE_LABEL = "Value fade"
    REDISTRIBUTE = "Redistribute duplicates"
    REDISTRIBUTE_FADE_LABEL = "Fade"
    COMPRESS = "Compress archive"

    # Options help dialog
    OPTIONS_HELP_TITLE = "Options Help"
    OPTIONS_HELP_TEXT = (
        "Sample names\n"
        "  <prefix><note><octave>[-<value>]<postfix>.<ext>\n"
        "  e.g. 'Piano C3.wav', 'Piano F#4-100 soft.wav'\n"
        "  Extensions: wav, aif, mp3, ogg\n\n"
        "Number after octave sets\n"
        "  Velocity: the value is the top of the sample's velocity layer.\n"
        "  Selection: the value is the top of the sample's selection band.\n\n"
        "Key fade\n"
        "  Crossfade width in semitones between neighbouring samples.\n\n"
        "Value fade\n"
        "  Crossfade width between neighbouring velocity/selection bands.\n\n"
        "Redistribute duplicates\n"
        "  Only offered when several samples share a key (velocity mode).\n"
        "  Spreads them evenly over the selection range, with the given fade.\n\n"
        "Compress archive\n"
        "  Deflate files inside the .multisample archive."
    )

    # Input section
    SELECT_INPUT = "SAMPLE FOLDER"
    SELECT_FOLDER = "Select Folder"
    BUILD = "Build Package"
    INPUT_HINT = "Folder of .wav / .aif / .mp3 / .ogg samples"

    # Log section
    CONVERSION_LOG = "LOG"
    COPY = "Copy"
    COPY_DEBUG = "Copy Details"
    CLEAR = "Clear"
    LOG_COPIED = "Log copied to clipboard"
    DEBUG_LOG_COPIED = "Details copied to clipboard"
    NO_DEBUG_LOG = "No details available yet"
    READY_MESSAGE = "Ready. Select output folder to begin."

    # Dialogs
    SELECT_OUTPUT_TITLE = "Select Output Folder"
    SELECT_INPUT_FOLDER_TITLE = "Select Folder Containing Samples"
    CONVERSION_COMPLETE = "Package Complete"
    CONVERSION_FAILED = "Package Failed"
    OK = "OK"

    # Errors
    SELECT_OUTPUT_FIRST = "Please select output folder first"
    SELECT_INPUT_FIRST = "Please select a sample folder first"

    # Progress
    SCANNING = "Scanning {folder}/..."
    SCAN_RESULT = "Found {samples} sample(s) on {keys} key(s)"
    SCAN_DUPLICATES = "{count} key(s) have several samples; redistribution available"
    STARTING_BUILD = "Building {name}.multisample..."
    BUILD_RESULT = "Written {path} ({zones} zones)"
