"""All magic numbers and configuration constants."""

DEFAULT_TAIL_SECONDS = 5.0          # end of the last segment = start + tail
TICK_SECONDS = 0.25                 # seconds between progress notifications
SETTINGS_SUFFIX = ".player.json"    # sidecar next to the lyrics file
DEFAULT_MODE = "repeat"             # "repeat" or "continuous"
DEFAULT_START_INDEX = 0
DEFAULT_LYRICS_FILE = "lyric.lrc"
VERSION = "0.1.0"
