"""
Verbosity-gated logging for structdata, on top of loguru.

LOG() reads the verbosity of the ProgramState connected for the current
context; nothing is printed when no state is connected, so the rewriter and
engine stay quiet when used as a library.

    state_connectToLogger(state)
    LOG("Rewrote 3 files", level=1)                       # INFO
    LOG("Loaded 42 vocabulary types", level=2)            # DEBUG
    LOG("Directive 'Article.author' -> ...", level=3)     # TRACE
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

# Verbosity level -> loguru severity of the record
LEVEL_NAMES = {1: "INFO", 2: "DEBUG", 3: "TRACE"}

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{name}:{function}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()
logger.add(sys.stderr, format=logger_format, level="TRACE")


def state_connectToLogger(state: Any) -> None:
    """Make state.verbosity govern LOG() calls in the current context"""
    _program_state.set(state)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message when the connected state's verbosity is at least level.

    Args:
        message: Text to log
        level: 1 progress, 2 detail, 3 per-directive trace
        **kwargs: Passed through to loguru for message formatting
    """
    state = _program_state.get()
    if state is None or getattr(state, 'verbosity', 0) < level:
        return

    severity = LEVEL_NAMES.get(level, "TRACE")
    logger.opt(depth=1).log(severity, message, **kwargs)
