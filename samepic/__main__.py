"""
Allow running the package with: python -m samepic

Examples:
    python -m samepic dir /path/to/photos
    python -m samepic rate /path/to/samples --samer squashcomp
    python -m samepic manipulate photo.jpg manipulated.png
    python -m samepic config --init
"""

import sys

from .cli import main


if __name__ == '__main__':
    sys.exit(main())
