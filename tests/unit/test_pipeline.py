"""Tests for the end-to-end build pipeline."""

import pytest

from toyen.emission import MemoryEmissionBackend
from toyen.orchestration import BuildPipeline, run_pipeline

EXECUTABLE = "/usr/bin/toyen"

BLUEPRINT = """
modules:
  - kind: copy
    name: headers
    sources: [include/a.h, include/b.h]
    destination: out/include
  - kind: script
    name: codegen
    deps: [headers]
    script: tools/gen.sh
    workingDir: out/gen
    outputs: [out/gen/gen.c]
  - kind: alias
    name: all
    deps: [codegen, headers]
"""


class TestPipelineSuccess:
    """Tests for successful runs."""

    @pytest.mark.asyncio
    async def test_writes_build_file_and_depfile(self, config, write_blueprint):
        """Test a complete run.

        Verifies that the build file and its depfile are written, that the
        build file regenerates itself, and that every declaration file read
        is listed in the depfile.
        """
        root = write_blueprint(BLUEPRINT)
        write_blueprint("modules:\n  - {kind: alias, name: extra}\n", "sub/Blueprints.yaml")
        root.write_text(root.read_text(encoding="utf-8") + "subdirs: [sub]\n", encoding="utf-8")

        result = await run_pipeline(root, config=config, executable=EXECUTABLE)

        assert result.success, result.errors
        assert result.modules == 4
        assert result.failed_stage is None
        assert [s.stage_name for s in result.stages] == ["load", "instantiate", "resolve", "compile", "emit"]

        build_text = config.build_file.read_text(encoding="utf-8")
        assert "rule builder" in build_text
        assert f"build {config.build_file}: builder\n  rootBlueprintFile = {root}\n" in build_text
        assert f"  depfile = {config.dep_file}" in build_text
        assert "build all: phony codegen headers" in build_text
        assert "build out/gen/gen.c: script tools/gen.sh | headers tools/gen.sh || out/gen" in build_text
        assert build_text.splitlines()[-1] == f"default headers codegen all extra {config.build_file}"

        depfile = config.dep_file.read_text(encoding="utf-8")
        assert depfile.startswith(f"{config.build_file}: \\\n")
        assert str(root) in depfile
        assert str(root.parent / "sub" / "Blueprints.yaml") in depfile
        assert result.dependencies == [str(root), str(root.parent / "sub" / "Blueprints.yaml")]

    @pytest.mark.asyncio
    async def test_output_is_byte_identical(self, config, write_blueprint):
        """Test deterministic output.

        Verifies that compiling an unchanged declaration set twice yields
        identical build files.
        """
        root = write_blueprint(BLUEPRINT)
        first = MemoryEmissionBackend()
        second = MemoryEmissionBackend()

        await run_pipeline(root, config=config, emitter=first, executable=EXECUTABLE)
        await run_pipeline(root, config=config, emitter=second, executable=EXECUTABLE)

        assert first.files == second.files
        assert set(first.files) == {config.build_file, config.dep_file}

    def test_variables_in_build_file(self, config, write_blueprint):
        pipeline = BuildPipeline(config=config, executable=EXECUTABLE)
        compiled = pipeline.compile(write_blueprint(BLUEPRINT))
        lines = compiled.build_file.splitlines()
        assert "TargetOS = Fuchsia" in lines
        assert "Jobs = 4" in lines
        assert "ninjaCmd = ninja" in lines


class TestPipelineFailure:
    """Tests for runs that must not write anything."""

    @pytest.mark.asyncio
    async def test_cycle_writes_nothing(self, config, write_blueprint):
        """Test failure on a dependency cycle.

        Verifies that the resolve stage fails, the cycle is reported, and no
        build file or depfile is written.
        """
        root = write_blueprint(
            """
            modules:
              - {kind: alias, name: a, deps: [b]}
              - {kind: alias, name: b, deps: [a]}
            """
        )
        result = await run_pipeline(root, config=config, executable=EXECUTABLE)

        assert not result.success
        assert result.failed_stage == "resolve"
        assert any("a -> b -> a" in e for e in result.errors)
        assert not config.build_file.exists()
        assert not config.dep_file.exists()

    @pytest.mark.asyncio
    async def test_all_instantiation_errors_reported(self, config, write_blueprint):
        root = write_blueprint(
            """
            modules:
              - {kind: copy, name: files, destination: out}
              - {kind: bazel, name: thing}
              - {kind: alias, name: files}
            """
        )
        result = await run_pipeline(root, config=config, executable=EXECUTABLE)

        assert result.failed_stage == "instantiate"
        assert len(result.errors) == 2
        assert not config.build_file.exists()

    @pytest.mark.asyncio
    async def test_duplicate_output_fails_compile(self, config, write_blueprint):
        root = write_blueprint(
            """
            modules:
              - {kind: copy, name: one, sources: [a], destination: out/x}
              - {kind: copy, name: two, sources: [b], destination: out/x}
            """
        )
        result = await run_pipeline(root, config=config, executable=EXECUTABLE)

        assert result.failed_stage == "compile"
        assert "out/x" in result.errors[0]
        assert result.stages[-1].errors

    @pytest.mark.asyncio
    async def test_load_errors(self, config, temp_dir):
        result = await run_pipeline(temp_dir / "missing.yaml", config=config, executable=EXECUTABLE)
        assert result.failed_stage == "load"
        assert not config.out_dir.exists()

    @pytest.mark.asyncio
    async def test_empty_output_path_writes_nothing(self, config, write_blueprint):
        root = write_blueprint(
            """
            modules:
              - {kind: script, name: s, script: a.sh, workingDir: w, outputs: ['']}
            """
        )
        result = await run_pipeline(root, config=config, executable=EXECUTABLE)

        assert result.failed_stage == "instantiate"
        assert "outputs" in result.errors[0]
        assert not config.build_file.exists()

    @pytest.mark.asyncio
    async def test_absolute_subdirs_pattern_fails_load(self, config, write_blueprint, temp_dir):
        root = write_blueprint(f"subdirs: ['{temp_dir / 'sub'}']\n")
        result = await run_pipeline(root, config=config, executable=EXECUTABLE)

        assert result.failed_stage == "load"
        assert not config.build_file.exists()
