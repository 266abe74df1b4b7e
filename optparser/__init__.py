__title__ = 'optparser'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

from .casting import *
from .faults import *
from .options import *
from .program import *
from .registry import *
from .result import *
from .tokenizer import *
from .usage import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 0, 0, "final", 0, "")

__all__ = (
    "__title__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of each module
__all__ += casting.__all__  # type: ignore[attr-defined]
__all__ += faults.__all__  # type: ignore[attr-defined]
__all__ += options.__all__  # type: ignore[attr-defined]
__all__ += program.__all__  # type: ignore[attr-defined]
__all__ += registry.__all__  # type: ignore[attr-defined]
__all__ += result.__all__  # type: ignore[attr-defined]
__all__ += tokenizer.__all__  # type: ignore[attr-defined]
__all__ += usage.__all__  # type: ignore[attr-defined]
