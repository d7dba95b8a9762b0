"""Utility layer errors."""

MISSING_SINGLE_VAR = "The following environment variable must be set: "
MISSING_MULTI_VARS = "One of the following environment variables must be set: "


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Configuration error."""

    pass


class MissingConfigError(ConfigurationError):
    """Raised when a required configuration value is not set.

    Names every environment variable that could have supplied the value.
    """

    def __init__(self, names: list[str]):
        self.names = names
        prefix = MISSING_SINGLE_VAR if len(names) == 1 else MISSING_MULTI_VARS
        super().__init__(prefix + ", ".join(names))
