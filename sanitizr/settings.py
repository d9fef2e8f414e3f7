# sanitizr/settings.py
import os

# External tools, looked up on PATH unless overridden
FFMPEG_BIN = os.getenv("SANITIZR_FFMPEG", "ffmpeg")
EXIFTOOL_BIN = os.getenv("SANITIZR_EXIFTOOL", "exiftool")
TOOL_TIMEOUT = int(os.getenv("SANITIZR_TOOL_TIMEOUT", 600))

JPEG_QUALITY = int(os.getenv("SANITIZR_JPEG_QUALITY", 100))
LOG_LEVEL = os.getenv("SANITIZR_LOG_LEVEL", "WARNING")

# HTTP upload limit
MAX_FILE_SIZE = int(os.getenv("MAX_FILE_SIZE", 500 * 1024 * 1024))

# Sibling temp files are named TEMP_PREFIX + original name
TEMP_PREFIX = ".sanitizr-"

# Earliest timestamp a zip entry can carry (DOS date/time starts in 1980)
ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)
