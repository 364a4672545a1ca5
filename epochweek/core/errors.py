from __future__ import annotations


class FormatError(ValueError):
    """Raised when an epoch value given as a string is not a base-10 integer."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Not a valid integer epoch value: {value!r}")
        self.value = value


class ConfigError(ValueError):
    pass
