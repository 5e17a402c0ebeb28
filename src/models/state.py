"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Dict, Callable
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the rewrite pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the run progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, pattern, semantic, suffix, disable
        - env_check: rewriter, envOK
        - sources_collect: inputFiles
        - html_rewrite: rewriteResult
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing source HTML files
        outputdir: Directory receiving rewritten files
        verbosity: Logging verbosity level (1-3)
        pattern: Glob pattern (relative to inputdir) selecting files to rewrite
        semantic: Semantic flavour name (Microdata or RDFa)
        suffix: Extra directive suffixes to register
        disable: Strip directives without emitting markup
        envOK: Environment validation passed
        rewriter: DirectiveRewriter configured for this run
        inputFiles: Files matched by pattern
        rewriteResult: Rewrite results (files, status)
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    pattern: str = field(default="**/*.html")
    semantic: str = field(default="Microdata")
    suffix: List[str] = field(default_factory=list)
    disable: bool = field(default=False)

    # Pipeline state
    envOK: bool = field(default=False)
    rewriter: Optional[Any] = field(default=None)  # DirectiveRewriter at runtime
    inputFiles: List[Path] = field(default_factory=list)
    rewriteResult: Optional[Dict] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments (pattern, semantic, etc.)
            inputdir: Directory containing source files
            outputdir: Directory for rewritten output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Drop CLI options that are not state fields, and unset ones so
        # the dataclass defaults apply
        filtered_options = {
            k: v for k, v in options_dict.items() if k in valid_fields and v is not None
        }

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}
        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            sources_collect,
            html_rewrite,
            results_report
        )

    This is equivalent to:
        results_report(html_rewrite(sources_collect(env_check(initial_state))))
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
