"""Top-level package for docpager.

Provides subpackages:
- docpager.layout – block measurement and page packing
- docpager.output – PDF rendering of paginated layouts
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.1.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    try:
        from importlib.metadata import version as pkg_version
        return pkg_version("docpager")
    except Exception:
        return "0.0.0"


__version__ = _get_version()

from .config import DocumentConfig
from .controller import BuildError, BuildResult, PaginationController, build_document

__all__ = [
    "__version__",
    "DocumentConfig",
    "PaginationController",
    "build_document",
    "BuildResult",
    "BuildError",
]
