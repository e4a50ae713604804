from typing import Any

# ==================================================
# Parameter Binding
# ==================================================

class ParameterBinder:
    """
    Accumulates positional parameter values and hands out PostgreSQL placeholders.
    """

    def __init__(self) -> None:
        self._params: list[Any] = []

    def bind(self, value: Any) -> str:
        """
        Appends `value` and returns its placeholder. Equal values are never merged.
        """
        self._params.append(value)
        return f"${len(self._params)}"

    @property
    def params(self) -> tuple[Any, ...]:
        return tuple(self._params)

    def __len__(self) -> int:
        return len(self._params)
