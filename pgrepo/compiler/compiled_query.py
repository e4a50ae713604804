from dataclasses import dataclass
from typing import Any

# ==================================================
# Compiled Output
# ==================================================

@dataclass(frozen=True)
class CompiledQuery:
    """
    Represents the result of the compilation process.
    Placeholders in `sql` refer to `params` by 1-based position.
    """
    sql: str
    params: tuple[Any, ...] = ()
