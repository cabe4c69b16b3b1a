"""Top-level package for the Punch Card Toolkit.

Provides subpackages:
- punchcard_toolkit.core – encoder, card/deck models, deck files
- punchcard_toolkit.templates – column layouts for classic card formats
- punchcard_toolkit.render – ASCII, raster and PDF card renderers
- punchcard_toolkit.cli – the ``punch`` command
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        for line in pyproject.read_text(encoding="utf-8").splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.3.0"
                return line.split("=")[1].strip().strip('"').strip("'")

    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("punchcard-toolkit")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__copyright__ = "Copyright 2026 punchcard-toolkit contributors"
__all__: list[str] = ["__version__", "__copyright__"]
