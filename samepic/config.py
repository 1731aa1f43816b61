"""
Configuration constants for samepic.

This module contains all configurable settings including:
- Default parameters for every comparison strategy
- Supported image extensions for directory scanning
- Default manipulation ranges used to synthesize positive samples

A strategy option left at zero always resolves to the default listed here.
"""

# Largest channel intensity on the common scale images are read on.
# 8-bit samples are widened by 257 so that 0xff maps to 0xffff.
MAX_CHANNEL_VALUE = 0xFFFF

# Average hash ("avghash")
DEFAULT_AVERAGE_HASH_SCALE_SIZE = 8     # images are scaled to 8x8 -> 64 bits
DEFAULT_AVERAGE_HASH_THRESHOLD = 0.9    # minimum fraction of matching bits

# Color profile ("colorprof")
DEFAULT_COLOR_PROF_BIN_COUNT = 8        # bins per channel histogram
DEFAULT_COLOR_PROF_THRESHOLD = 0.97     # minimum histogram correlation

# Squash comparison ("squashcomp")
# Larger vector sizes tolerate finer crops but cost O(V^2) correlations
# per direction.
DEFAULT_SQUASH_COMP_MIN_OVERLAP = 0.7
DEFAULT_SQUASH_COMP_VECTOR_SIZE = 150
DEFAULT_SQUASH_COMP_THRESHOLD = 0.995

# Default strategy used by the command line when none is given
DEFAULT_SAMER = "avghash"

# Output channel capacity for batch matching
BATCH_QUEUE_SIZE = 1

# Number of trials run by the rating harness
DEFAULT_RATE_COUNT = 100

# Default manipulation ranges (see manipulators.DEFAULT_MANIPULATOR)
DEFAULT_MIN_SCALE = 0.5
DEFAULT_MAX_SCALE = 1.5
DEFAULT_MIN_MAJOR_KEEP = 0.5
DEFAULT_MIN_MINOR_KEEP = 0.8
DEFAULT_MANIPULATION_PROBABILITY = 0.5

# Image extensions picked up when scanning a directory
IMAGE_EXTENSIONS = {
    # Common formats
    '.jpg', '.jpeg', '.png', '.gif', '.bmp', '.webp', '.tiff', '.tif',
    # Other formats Pillow decodes natively
    '.ico', '.pbm', '.pgm', '.ppm', '.pnm', '.tga', '.pcx', '.sgi',
    # Require pillow-heif
    '.heic', '.heif',
}

# Decompression bomb limit for large images (pixels)
MAX_IMAGE_PIXELS = 500_000_000
