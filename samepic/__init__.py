"""
samepic
=======
Detect whether two pictures contain the same subject.

Features:
- Interchangeable comparison strategies behind one same(img1, img2) call
- Average hash: illumination-tolerant bit signature
- Color profile: layout-independent color histogram correlation
- Squash comparison: crop and rescale tolerant line correlation
- Streaming batch matching that reports pairs as soon as they are found
- Accuracy rating against manipulated samples
- CLI for scanning directories and rating strategies
"""

__version__ = "1.0.0"

from .models import IDImage, Pair, RateResult
from .errors import SamepicError, ConfigurationError, SampleError, ImageLoadError
from .strategies import (
    Samer,
    BatchSamer,
    AverageHash,
    ColorProf,
    SquashAxis,
    SquashComp,
    available_samers,
    create_samer,
    create_batch_samer,
)
from .batch import stream_pairs, find_pairs
from .rating import rate
from .samples import Samples, DirSamples
from .manipulators import (
    Manipulator,
    CompressJPEG,
    Scale,
    Crop,
    AggregateManipulator,
    DEFAULT_MANIPULATOR,
)
from .discovery import find_image_files, load_image, stream_images

__all__ = [
    "IDImage",
    "Pair",
    "RateResult",
    "SamepicError",
    "ConfigurationError",
    "SampleError",
    "ImageLoadError",
    "Samer",
    "BatchSamer",
    "AverageHash",
    "ColorProf",
    "SquashAxis",
    "SquashComp",
    "available_samers",
    "create_samer",
    "create_batch_samer",
    "stream_pairs",
    "find_pairs",
    "rate",
    "Samples",
    "DirSamples",
    "Manipulator",
    "CompressJPEG",
    "Scale",
    "Crop",
    "AggregateManipulator",
    "DEFAULT_MANIPULATOR",
    "find_image_files",
    "load_image",
    "stream_images",
]
