"""Unit tests for configuration and triple decomposition."""

import pytest
from pydantic import ValidationError

from toyen.core.config import Config, Triple, default_host_triple
from toyen.core.exceptions import TripleError


class TestTriple:
    """Tests for platform triple parsing."""

    def test_arch_is_first_component(self):
        """Test architecture extraction.

        Verifies that the architecture is everything before the first dash.
        """
        assert Triple.parse("x86_64-unknown-linux").arch == "x86_64"

    def test_os_is_last_component_capitalized(self):
        """Test OS extraction.

        Verifies that the OS is the last component with its first letter
        upper-cased and the rest untouched.
        """
        assert Triple.parse("aarch64-unknown-fuchsia").os == "Fuchsia"
        assert Triple.parse("x86_64-apple-macosx10.9").os == "Macosx10.9"

    def test_empty_triple_is_unset(self):
        triple = Triple.parse("")
        assert triple.arch == ""
        assert triple.os == ""

    @pytest.mark.parametrize("text", ["x86_64", "-linux", "x86_64-", "-"])
    def test_malformed_triple_rejected(self, text):
        """Test malformed triples fail loudly.

        Verifies that a non-empty triple missing an architecture or an OS
        raises TripleError instead of yielding degenerate strings.
        """
        with pytest.raises(TripleError) as exc_info:
            Triple.parse(text)
        assert exc_info.value.triple == text

    def test_default_host_triple_parses(self):
        triple = Triple.parse(default_host_triple())
        assert triple.arch
        assert triple.os


class TestConfig:
    """Tests for the shared build configuration."""

    def test_derived_host_and_target(self, config):
        """Test derived architecture and OS values.

        Verifies that host and target are decomposed independently.
        """
        assert config.host_arch == "x86_64"
        assert config.host_os == "Linux"
        assert config.target_arch == "aarch64"
        assert config.target_os == "Fuchsia"

    def test_build_file_and_depfile(self, config, temp_dir):
        assert config.build_file == temp_dir / "out" / "build.ninja"
        assert str(config.dep_file) == str(temp_dir / "out" / "build.ninja") + ".d"

    def test_config_is_read_only(self, config):
        """Test that configuration cannot be mutated.

        Verifies that assigning to a field of the frozen model fails.
        """
        with pytest.raises(ValidationError):
            config.jobs = 8

    def test_invalid_triple_rejected_by_model(self):
        with pytest.raises(ValidationError):
            Config(host_triple="nonsense")

    def test_jobs_must_be_positive(self):
        with pytest.raises(ValidationError):
            Config(host_triple="x86_64-linux", jobs=0)

    def test_variables_expose_config(self, config):
        """Test Ninja variables derived from configuration.

        Verifies that every config value rule commands may reference is
        exported as a string.
        """
        variables = config.variables()
        assert variables["Jobs"] == "4"
        assert variables["HostOS"] == "Linux"
        assert variables["TargetArch"] == "aarch64"
        assert variables["OutDir"] == str(config.out_dir)

    def test_from_env_reads_environment(self, monkeypatch):
        """Test environment variable configuration.

        Verifies that TOYEN_* variables are read and that explicit overrides
        take precedence over them.
        """
        monkeypatch.setenv("TOYEN_JOBS", "3")
        monkeypatch.setenv("TOYEN_TARGET", "armv7a-linux")
        monkeypatch.setenv("TOYEN_LOG_LEVEL", "debug")

        config = Config.from_env(host_triple="x86_64-darwin")
        assert config.jobs == 3
        assert config.target_triple == "armv7a-linux"
        assert config.log_level == "DEBUG"
        assert config.host_os == "Darwin"

        overridden = Config.from_env(jobs=9, target_triple=None)
        assert overridden.jobs == 9
        assert overridden.target_triple == "armv7a-linux"

    def test_from_env_raises_triple_error(self, monkeypatch):
        monkeypatch.delenv("TOYEN_HOST", raising=False)
        with pytest.raises(TripleError):
            Config.from_env(host_triple="linux")

    def test_from_env_resolves_directories(self, temp_dir):
        config = Config.from_env(src_dir=temp_dir / "a" / "..", out_dir=temp_dir)
        assert config.src_dir == temp_dir
        assert config.out_dir == temp_dir
