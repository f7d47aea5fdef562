"""Test that the package version matches the one declared in pyproject.toml."""

import re
from pathlib import Path

import streamdeck_plugin


def test_versions_match():
    """Verify that `__version__` matches the project version in pyproject.toml."""
    repo_root = Path(__file__).parent.parent
    pyproject_path = repo_root / "pyproject.toml"
    assert pyproject_path.exists(), "Could not find pyproject.toml"

    with open(pyproject_path, "r") as f:
        pyproject_content = f.read()

    # Extract the version using regex
    match = re.search(r'^version\s*=\s*["\']([^"\']+)["\']', pyproject_content, re.M)
    assert match, "Could not find version in pyproject.toml"

    assert streamdeck_plugin.__version__ == match.group(1), (
        f"Version mismatch: {streamdeck_plugin.__version__} in __init__.py does not "
        f"match {match.group(1)} in pyproject.toml."
    )
