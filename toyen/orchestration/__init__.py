"""Orchestration module for toyen."""

from .pipeline import BuildPipeline, CompiledBuild, PipelineResult, StageFailed, run_pipeline

__all__ = [
    "BuildPipeline",
    "CompiledBuild",
    "PipelineResult",
    "StageFailed",
    "run_pipeline",
]
