"""
millerrabin error module
"""

from typing import List, Optional, Tuple


# Type alias for error context entries
Context = List[Tuple[str, str]]


class MillerRabinError(Exception):
    """Base exception with optional key/value context"""

    def __init__(self, msg: str, context: Optional[Context] = None):
        self.msg = msg
        self.context = context or []
        super().__init__(self.format_message())

    def format_message(self) -> str:
        if not self.context:
            return self.msg

        context_str = ""
        for key, value in self.context:
            context_str += f"\n{key}: {value}"

        return f"{self.msg}{context_str}"


class InvalidIterationCountError(MillerRabinError, ValueError):
    """Iteration count is not a positive integer"""

    def __init__(self, iterations: object):
        self.iterations = iterations
        super().__init__(
            "iterations must be a positive integer",
            [("iterations", repr(iterations))],
        )


class InvalidCandidateError(MillerRabinError, ValueError):
    """Candidate is not an integer, or violates a precondition"""

    def __init__(self, msg: str, candidate: object):
        self.candidate = candidate
        super().__init__(msg, [("candidate", repr(candidate))])


class UnknownStrategyError(MillerRabinError, KeyError):
    """No strategy is registered under the requested name"""

    def __init__(self, name: str, available: List[str]):
        self.name = name
        super().__init__(
            f"Unknown strategy: {name}",
            [("available", ", ".join(sorted(available)))],
        )

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.format_message()


def check_iterations(iterations: object) -> int:
    """Reject anything that is not a positive int"""
    if isinstance(iterations, bool) or not isinstance(iterations, int) or iterations <= 0:
        raise InvalidIterationCountError(iterations)
    return iterations
