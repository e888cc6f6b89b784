"""Version of the Bwadl API distribution.

Installed builds answer from package metadata; a source checkout reads the
``[project]`` table of the repository's pyproject.toml.
"""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DISTRIBUTION_NAME = "bwadl-api"

# src/api/infrastructure/version.py -> repository root
DEFAULT_PYPROJECT = Path(__file__).resolve().parents[3] / "pyproject.toml"

UNKNOWN_VERSION = "0.0.0+unknown"


def get_version(
    distribution: str = DISTRIBUTION_NAME,
    pyproject: Path = DEFAULT_PYPROJECT,
) -> str:
    """Get the application version.

    Returns:
        Version string (e.g., "0.1.0"), or UNKNOWN_VERSION when neither
        metadata nor pyproject.toml is available
    """
    try:
        return version(distribution)
    except PackageNotFoundError:
        pass

    try:
        with pyproject.open("rb") as f:
            return tomllib.load(f)["project"]["version"]
    except (FileNotFoundError, KeyError):
        return UNKNOWN_VERSION


__version__ = get_version()
