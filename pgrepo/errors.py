from typing import Any

# ==================================================
# Compilation Errors
# ==================================================


class CompilationError(ValueError):
    """
    Raised when a statement cannot be translated to SQL. Always a programming error.
    """


class UnsupportedPredicateError(CompilationError):
    """
    Raised for any predicate shape outside the supported set.
    """

    def __init__(self, predicate: Any) -> None:
        self.predicate = predicate
        super().__init__(f"Unsupported predicate: {predicate!r}")
