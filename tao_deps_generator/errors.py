"""
Fatal error types raised when the platform breaks an ABI assumption
"""

import inspect
import os


class AbiAssertionError(Exception):
    """An assumption about the native ABI does not hold on this platform.

    These errors are never recovered from: the generated bindings would be
    silently wrong, so the run aborts with no output.
    """

    def __init__(self, expression: str, function: str = "?", filename: str = "?", lineno: int = 0):
        self.expression = expression
        self.function = function
        self.filename = filename
        self.lineno = lineno
        super().__init__(f"Assertion `{expression}' failed in {function} ({filename}:{lineno}).")


class UnrepresentableWidthError(AbiAssertionError):
    """A measured size has no built-in sized type in Julia"""


class ProbeError(AbiAssertionError):
    """The probe translation unit could not be compiled"""


def abi_assert(condition, expression: str, error_class=AbiAssertionError):
    """Raise `error_class` describing `expression` unless `condition` holds

    The location reported is the caller's, not this function's.
    """
    if condition:
        return
    frame = inspect.currentframe().f_back
    try:
        raise error_class(
            expression,
            function=frame.f_code.co_name,
            filename=os.path.basename(frame.f_code.co_filename),
            lineno=frame.f_lineno,
        )
    finally:
        del frame
