"""
Engine — Pipeline orchestration.

The engine selects a pipeline, runs passes in order,
and packages output.

The engine is NOT where text-processing logic lives.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from nate.core.context import AnnotateContext, AnnotateRequest
from nate.core.logging import AnnotateLogger
from nate.ir.enums import AnnotateStatus
from nate.ir.schema_v0_1 import AnnotateResult
from nate.vocab.schema import EngineSettings, Vocabulary


# Type alias for a pass function
PassFn = Callable[[AnnotateContext], AnnotateContext]


@dataclass
class Pipeline:
    """A named sequence of passes."""

    id: str
    name: str
    passes: list[PassFn]


class Engine:
    """
    Pipeline orchestrator.

    Runs passes in order, handles errors, and packages results.
    """

    def __init__(
        self,
        vocabulary: Optional[Vocabulary] = None,
        settings: Optional[EngineSettings] = None,
    ) -> None:
        self._pipelines: dict[str, Pipeline] = {}
        self.vocabulary = vocabulary
        self.settings = settings

    def register_pipeline(self, pipeline: Pipeline) -> None:
        """Register a pipeline by ID."""
        self._pipelines[pipeline.id] = pipeline

    def list_pipelines(self) -> list[str]:
        """List registered pipeline IDs."""
        return list(self._pipelines.keys())

    def annotate(
        self,
        request: AnnotateRequest,
        pipeline_id: Optional[str] = None,
    ) -> AnnotateResult:
        """
        Run an annotation.

        Args:
            request: The annotation request
            pipeline_id: Which pipeline to use (default: 'default')

        Returns:
            AnnotateResult with sections, timeline, trace, and diagnostics
        """
        pipeline_id = pipeline_id or "default"
        ctx = AnnotateContext.from_request(
            request,
            vocabulary=self.vocabulary,
            settings=self.settings,
        )

        if pipeline_id not in self._pipelines:
            ctx.status = AnnotateStatus.ERROR
            ctx.add_diagnostic(
                level="error",
                code="PIPELINE_NOT_FOUND",
                message=f"Pipeline '{pipeline_id}' not registered",
                source="engine",
            )
            return ctx.to_result()

        pipeline = self._pipelines[pipeline_id]
        alog = AnnotateLogger(request.request_id)

        for pass_fn in pipeline.passes:
            pass_name = pass_fn.__name__
            try:
                alog.pass_start(pass_name)
                ctx = pass_fn(ctx)
                alog.pass_end(pass_name)
            except Exception as e:
                alog.pass_error(pass_name, e)
                ctx.status = AnnotateStatus.ERROR
                ctx.add_diagnostic(
                    level="error",
                    code="PASS_ERROR",
                    message=f"Pass '{pass_name}' failed: {e}",
                    source="engine",
                )
                ctx.add_trace(pass_name=pass_name, action="error")
                break

        alog.annotate_complete(
            status=ctx.status.value,
            sections=len(ctx.sections),
            day_groups=len(ctx.timeline),
            diagnostics=len(ctx.diagnostics),
        )

        return ctx.to_result()


def setup_default_pipeline(engine: Engine) -> None:
    """Register the default annotation pipeline."""
    from nate.passes import (
        build_timeline_pass,
        classify_tokens_pass,
        decompose_lines,
        extract_direct_answer_pass,
        normalize,
        package,
        present_citations_pass,
        split_sections_pass,
    )

    engine.register_pipeline(
        Pipeline(
            id="default",
            name="Default NATE Pipeline",
            passes=[
                normalize,
                extract_direct_answer_pass,
                split_sections_pass,
                decompose_lines,
                classify_tokens_pass,
                present_citations_pass,
                build_timeline_pass,
                package,
            ],
        )
    )


# Global engine instance
_engine: Optional[Engine] = None


def get_engine() -> Engine:
    """Get or create the global engine instance with the default pipeline."""
    global _engine
    if _engine is None:
        _engine = Engine()
        setup_default_pipeline(_engine)
    return _engine


def annotate(text: str, pipeline_id: Optional[str] = None) -> AnnotateResult:
    """
    Convenience function for simple annotations.

    Args:
        text: Raw narrative text
        pipeline_id: Which pipeline to use

    Returns:
        AnnotateResult
    """
    engine = get_engine()
    request = AnnotateRequest(text=text)
    return engine.annotate(request, pipeline_id)
