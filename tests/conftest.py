"""Shared test fixtures for reelcompose tests."""

import pytest
import yaml


@pytest.fixture
def write_manifest(tmp_path):
    """Return a function that writes a manifest dict to YAML and returns its path."""
    counter = {"n": 0}

    def _write(content) -> str:
        counter["n"] += 1
        path = tmp_path / f"composition-{counter['n']}.yaml"
        with open(path, "w") as f:
            yaml.dump(content, f)
        return str(path)

    return _write
