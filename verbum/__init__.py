__title__ = 'verbum'
__license__ = 'MIT'
__version__ = "0.0.0"

from .app import *
from .coercion import *
from .faults import *
from .help import *
from .options import *
from .registry import *
from .resolution import *
from .verbs import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

version_info = VersionInfo(0, 0, 0, "final", 0, "")

__all__ = (
    "__title__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of every layer
__all__ += app.__all__  # type: ignore[attr-defined]
__all__ += coercion.__all__  # type: ignore[attr-defined]
__all__ += faults.__all__  # type: ignore[attr-defined]
__all__ += help.__all__  # type: ignore[attr-defined]
__all__ += options.__all__  # type: ignore[attr-defined]
__all__ += registry.__all__  # type: ignore[attr-defined]
__all__ += resolution.__all__  # type: ignore[attr-defined]
__all__ += verbs.__all__  # type: ignore[attr-defined]
