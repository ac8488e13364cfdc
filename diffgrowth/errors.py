"""
Exceptions raised by the differential growth engine.
"""


class ConfigurationError(ValueError):
    """Invalid starting points or simulation parameters."""

    def __init__(self, parameter: str, message: str):
        self.parameter = parameter
        super().__init__(f"{parameter}: {message}")
