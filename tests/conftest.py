"""Test configuration for toyen."""

import tempfile
import textwrap
from pathlib import Path

import pytest

from toyen.core.config import Config
from toyen.registry import create_registry


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests.

    Yields:
        Path: A Path object pointing to the temporary directory.
            The directory is automatically cleaned up after the test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def config(temp_dir):
    """Create a build configuration rooted in the temporary directory.

    Returns:
        Config: Fixed triples and job count so output is predictable.
    """
    return Config(
        src_dir=temp_dir,
        out_dir=temp_dir / "out",
        host_triple="x86_64-linux",
        target_triple="aarch64-unknown-fuchsia",
        jobs=4,
    )


@pytest.fixture
def registry(config):
    """Create a registry holding every built-in module kind."""
    return create_registry(config)


@pytest.fixture
def make_module(registry):
    """Factory fixture building validated modules.

    Returns:
        Callable: ``make_module(kind, name, deps=None, **properties)``.
    """

    def _make(kind, name, deps=None, **properties):
        return registry.instantiate(kind, name, properties, deps or [])

    return _make


@pytest.fixture
def write_blueprint(temp_dir):
    """Write a declaration file below the temporary directory.

    Returns:
        Callable: ``write_blueprint(text, relative_path="Blueprints.yaml")``
            returning the written path.
    """

    def _write(text, relative_path="Blueprints.yaml"):
        path = temp_dir / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(text), encoding="utf-8")
        return path

    return _write
