"""
Translation context threaded through every operation.

The context carries the two capabilities the translators need from their
surroundings: debug tracing and fail-fast reporting. It also carries the
collaborator used for numeric scalars, which live outside this package.
"""

import logging
from typing import TYPE_CHECKING, Any, Callable, Optional, Tuple

if TYPE_CHECKING:
    from .rules import FieldConstraints, ScalarKind
    from .schema import Schema

# Signature shared with the scalar translators:
#   (ctx, kind, constraints) -> (schema, required)
NumericTranslator = Callable[
    ['Context', 'ScalarKind', Optional['FieldConstraints']],
    Tuple['Schema', bool],
]


class GenerationError(Exception):
    """Fatal error that aborts the whole generation run."""


class Context:
    """
    Read-only per-run context.

    Attributes:
        logger: Logger used for debug tracing
        numeric: Translator for numeric scalar kinds, or None when the
                 caller does not provide one
    """

    def __init__(self, logger: Optional[logging.Logger] = None,
                 numeric: Optional[NumericTranslator] = None):
        self.logger = logger if logger is not None else logging.getLogger(__package__)
        self.numeric = numeric

    def debug(self, msg: str, *args: Any) -> None:
        self.logger.debug(msg, *args)

    def fail(self, msg: str, *args: Any) -> None:
        """
        Abort the run with a diagnostic.

        Raises:
            GenerationError: always
        """
        text = msg % args if args else msg
        self.logger.debug("fatal: %s", text)
        raise GenerationError(text)
