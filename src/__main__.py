#!/usr/bin/env python3
"""
structdata - schema.org structured data for HTML, from compact directives

Rewrites data-<suffix> directive attributes in HTML files into Microdata or
RDFa markup.

As an aside, this codebase leverages the ChRIS "plugin" concept/pattern as
general purpose python app development framework.

Directive syntax:
    data-sd='Article'                 itemscope itemtype='https://schema.org/Article'
    data-sd='url'                     itemprop='url'
    data-sd='Article.author.Person'   itemprop='author' itemscope itemtype='.../Person'
    data-sd='description articleBody' first property valid for the current type

Usage:
    structdata inputdir/ outputdir/ --pattern '**/*.html'

    Every matching file is written to outputdir/ at the same relative path.

Examples:
    # Microdata (default)
    structdata site/ out/

    # RDFa with an extra attribute suffix (data-schema='...')
    structdata site/ out/ --semantic RDFa --suffix schema

    # Strip directives without emitting markup
    structdata site/ out/ --disable -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .lib import DirectiveRewriter, SemanticError, VocabularyError, __version__, LOG, state_connectToLogger
from .models import ProgramState, pipeline
from .config import appsettings


DISPLAY_TITLE = r"""
       _                   _      _       _
   ___| |_ _ __ _   _  ___| |_ __| | __ _| |_ __ _
  / __| __| '__| | | |/ __| __/ _` |/ _` | __/ _` |
  \__ \ |_| |  | |_| | (__| || (_| | (_| | || (_| |
  |___/\__|_|   \__,_|\___|\__\__,_|\__,_|\__\__,_|

  schema.org structured data from compact directives
"""

# Define CLI arguments
parser = ArgumentParser(
    description="structdata - rewrite data-* directives into schema.org structured data",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--pattern",
    default="**/*.html",
    type=str,
    help="Glob pattern (relative to inputdir) selecting the files to rewrite",
)

parser.add_argument(
    "--semantic",
    default=appsettings.semantic,
    type=str,
    help="Semantic flavour of the generated markup: Microdata or RDFa",
)

parser.add_argument(
    "--suffix",
    action="append",
    default=None,
    type=str,
    help=f"Extra directive attribute suffix (repeatable); '{appsettings.default_suffix}' is always registered",
)

parser.add_argument(
    "--disable",
    action="store_true",
    default=False,
    help="Strip directive attributes without emitting structured data",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and build the rewriter.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - rewriter: DirectiveRewriter for the requested semantic/suffixes
            - envOK: True if environment is valid

    Exits:
        1 if inputdir is missing, or the semantic or vocabulary is invalid
    """

    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    if state.inputdir is None or not state.inputdir.is_dir():
        print(f"Error: Input directory not found: {state.inputdir}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    try:
        state.rewriter = DirectiveRewriter(
            semantic=state.semantic,
            suffixes=state.suffix,
            enabled=not state.disable,
        )
    except SemanticError as e:
        print(f"Error: {e}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)
    except VocabularyError as e:
        print(f"Vocabulary error: {e}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    LOG(f"Semantic: {state.rewriter.semantic_get()}", level=2)
    LOG(f"Suffixes: {', '.join(state.rewriter.suffixes_get())}", level=2)

    state.outputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.outputdir}", level=2)

    state.envOK = True
    return state


def sources_collect(inputstate: ProgramState) -> ProgramState:
    """
    Find the files to rewrite.

    Returns:
        ProgramState with added field:
            - inputFiles: Sorted list of files under inputdir matching pattern
    """

    state = inputstate.copy()

    LOG(f"Collecting sources matching {state.pattern}...", level=1)
    state.inputFiles = sorted(p for p in state.inputdir.glob(state.pattern) if p.is_file())
    LOG(f"Found {len(state.inputFiles)} file(s)", level=2)
    return state


def html_rewrite(inputstate: ProgramState) -> ProgramState:
    """
    Rewrite each collected file into outputdir.

    Files are processed in order with the same rewriter, so a type set in
    one file stays current for the next.

    Returns:
        ProgramState with added field:
            - rewriteResult: Dict containing:
                - status: bool
                - files: List[str] of written output paths

    Exits:
        1 if a file cannot be read, decoded as UTF-8 or written
    """

    state = inputstate.copy()

    LOG("Rewriting directives...", level=1)

    written = []
    for input_file in state.inputFiles:
        output_file = state.outputdir / input_file.relative_to(state.inputdir)
        try:
            source = input_file.read_text(encoding="utf-8")
            LOG(f"Read {len(source)} characters from {input_file.name}", level=2)
            output_file.parent.mkdir(parents=True, exist_ok=True)
            output_file.write_text(state.rewriter.parse(source), encoding="utf-8")
        except UnicodeDecodeError as e:
            print(f"Error rewriting {input_file}: not valid UTF-8 ({e.reason} at byte {e.start})", file=sys.stderr)
            sys.exit(1)
        except OSError as e:
            print(f"Error rewriting {input_file}: {e}", file=sys.stderr)
            sys.exit(1)
        LOG(f"Wrote {output_file}", level=2)
        written.append(str(output_file))

    state.rewriteResult = {"status": True, "files": written}
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display rewrite results to user.

    Exits:
        1 if rewriteResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.rewriteResult:
        print("Error: Rewrite failed", file=sys.stderr)
        sys.exit(1)

    if state.verbosity >= 1:
        LOG("\n✓ Rewrite successful!", level=1)
        LOG(f"  Files: {len(state.rewriteResult['files'])}", level=1)
        LOG(f"  Output: {state.outputdir}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="structdata - schema.org structured data from compact directives",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - rewrite directive attributes in HTML files.

    Orchestrates the pipeline:
        1. env_check: Validate paths, build the rewriter
        2. sources_collect: Glob input files
        3. html_rewrite: Rewrite each file into outputdir
        4. results_report: Display results to user

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, env_check, sources_collect, html_rewrite, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
