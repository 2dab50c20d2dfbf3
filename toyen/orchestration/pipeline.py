"""
Main pipeline orchestration for toyen.

Runs the phases in order: load declarations, instantiate modules, resolve
the dependency graph, compile actions, add the regeneration action, write
the build file and its depfile. Each phase reports all of its errors at once
and nothing is written unless every phase succeeded.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, Field

from ..compiler.bootstrap import Bootstrap, resolve_executable
from ..compiler.plan import BuildPlan
from ..compiler.rules import STATIC_VARIABLES
from ..core.config import Config, get_config
from ..core.exceptions import CollectedErrors, ToyenError
from ..core.logging import bind_context, clear_context, get_logger
from ..core.types import StageResult
from ..emission import EmissionBackend, LocalEmissionBackend, render_build_file, render_depfile
from ..graph import DependencyGraph
from ..loader import load_declarations
from ..registry import ModuleRegistry, create_registry

logger = get_logger(__name__)


class PipelineResult(BaseModel):
    """Result of a complete toyen run."""

    run_id: str
    success: bool
    started_at: datetime
    completed_at: datetime

    root_file: str = ""
    build_file: str = ""
    dep_file: str = ""

    modules: int = 0
    actions: int = 0
    dependencies: list[str] = Field(default_factory=list, description="Files recorded in the depfile")
    stages: list[StageResult] = Field(default_factory=list)

    errors: list[str] = Field(default_factory=list)
    failed_stage: str | None = None


@dataclass
class CompiledBuild:
    """Everything the emission phase needs."""

    plan: BuildPlan
    build_file: str
    depfile: str
    dependencies: list[str] = field(default_factory=list)
    modules: int = 0


class StageFailed(Exception):
    def __init__(self, stage: str, errors: list[ToyenError]) -> None:
        super().__init__(stage)
        self.stage = stage
        self.errors = errors


def _flatten(errors: list[ToyenError]) -> list[ToyenError]:
    flat: list[ToyenError] = []
    for err in errors:
        if isinstance(err, CollectedErrors):
            flat.extend(_flatten(err.errors))
        else:
            flat.append(err)
    return flat


class BuildPipeline:
    """Compiles a declaration tree into a Ninja build file."""

    def __init__(
        self,
        config: Config | None = None,
        emitter: EmissionBackend | None = None,
        registry: ModuleRegistry | None = None,
        executable: str | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            config: Build configuration. Uses the global config if not provided.
            emitter: Where files are written. Defaults to the local filesystem.
            registry: Module kinds available. Defaults to all built-in kinds.
            executable: Command that re-runs toyen; located from sys.argv if
                not provided.
        """
        self.config = config or get_config()
        self.emitter = emitter or LocalEmissionBackend()
        self.registry = registry or create_registry(self.config)
        self.executable = executable
        self.stages: list[StageResult] = []

    def _stage(self, name: str) -> StageResult:
        stage = StageResult(stage_name=name)
        self.stages.append(stage)
        logger.info("Stage started", stage=name)
        return stage

    def _fail(self, stage: StageResult, errors: list[ToyenError]) -> StageFailed:
        errors = _flatten(errors)
        stage.mark_failed([str(e) for e in errors])
        logger.error("Stage failed", stage=stage.stage_name, errors=len(errors))
        return StageFailed(stage.stage_name, errors)

    def compile(self, root_file: Path) -> CompiledBuild:
        """Run every phase up to, but not including, writing files.

        Raises:
            StageFailed: With the failing stage name and all of its errors.
        """
        root_file = root_file.resolve()

        stage = self._stage("load")
        loaded = load_declarations(root_file)
        if loaded.errors:
            raise self._fail(stage, loaded.errors)
        stage.mark_completed(files=len(loaded.files), declarations=len(loaded.declarations))

        stage = self._stage("instantiate")
        graph = DependencyGraph()
        errors: list[ToyenError] = []
        for decl in loaded.declarations:
            try:
                module = self.registry.instantiate(
                    decl.kind, decl.name, decl.properties, decl.dependencies, source=decl.source
                )
                graph.add_module(module)
            except ToyenError as e:
                errors.append(e)
        if errors:
            raise self._fail(stage, errors)
        stage.mark_completed(modules=len(graph))

        stage = self._stage("resolve")
        try:
            graph.resolve()
        except CollectedErrors as e:
            raise self._fail(stage, [e]) from e
        stage.mark_completed()

        stage = self._stage("compile")
        plan = BuildPlan()
        for module in graph.modules():
            compiler = self.registry.compiler_for(module.kind)
            plan.add(module.name, compiler.compile(module, graph.direct_dependency_targets(module)))

        try:
            executable = self.executable or resolve_executable()
        except ToyenError as e:
            raise self._fail(stage, [e]) from e
        bootstrap = Bootstrap(self.config, root_file, executable)
        plan.add("bootstrap", bootstrap.build_actions())

        try:
            plan.check()
        except CollectedErrors as e:
            raise self._fail(stage, [e]) from e
        stage.mark_completed(actions=len(plan))

        variables = {**STATIC_VARIABLES, **self.config.variables()}
        dependencies = list(dict.fromkeys(loaded.files))
        build_file = str(self.config.build_file)
        return CompiledBuild(
            plan=plan,
            build_file=render_build_file(plan, variables),
            depfile=render_depfile(build_file, dependencies),
            dependencies=dependencies,
            modules=len(graph),
        )

    async def emit(self, compiled: CompiledBuild) -> None:
        """Write the build file, then the depfile.

        Raises:
            StageFailed: If either file cannot be written.
        """
        stage = self._stage("emit")
        try:
            await self.emitter.write_text(self.config.build_file, compiled.build_file)
            await self.emitter.write_text(self.config.dep_file, compiled.depfile)
        except ToyenError as e:
            raise self._fail(stage, [e]) from e
        stage.mark_completed(build_file=str(self.config.build_file))

    async def run(self, root_file: Path) -> PipelineResult:
        """Compile ``root_file`` and write the results.

        Args:
            root_file: Root declaration file.

        Returns:
            PipelineResult describing the run; never raises for toyen errors.
        """
        self.stages = []
        run_id = str(uuid.uuid4())[:8]
        started_at = datetime.now(timezone.utc)
        bind_context(run_id=run_id)
        logger.info("Starting toyen", root_file=str(root_file), out_dir=str(self.config.out_dir))

        result = PipelineResult(
            run_id=run_id,
            success=False,
            started_at=started_at,
            completed_at=started_at,
            root_file=str(root_file.resolve()),
            build_file=str(self.config.build_file),
            dep_file=str(self.config.dep_file),
        )
        try:
            compiled = self.compile(root_file)
            await self.emit(compiled)
        except StageFailed as e:
            result.errors = [str(err) for err in e.errors]
            result.failed_stage = e.stage
        else:
            result.success = True
            result.modules = compiled.modules
            result.actions = len(compiled.plan)
            result.dependencies = compiled.dependencies
            logger.info(
                "toyen completed",
                modules=result.modules,
                actions=result.actions,
                build_file=result.build_file,
            )
        finally:
            clear_context()

        result.completed_at = datetime.now(timezone.utc)
        result.stages = list(self.stages)
        return result


async def run_pipeline(
    root_file: Path,
    config: Config | None = None,
    emitter: EmissionBackend | None = None,
    executable: str | None = None,
) -> PipelineResult:
    """Convenience function to run the toyen pipeline.

    Args:
        root_file: Root declaration file.
        config: Build configuration.
        emitter: Where files are written.
        executable: Command that re-runs toyen.

    Returns:
        PipelineResult with counts and any errors.
    """
    pipeline = BuildPipeline(config=config, emitter=emitter, executable=executable)
    return await pipeline.run(root_file)
