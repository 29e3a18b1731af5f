"""Exceptions that stop (or skip part of) an inspection run."""


class PipelineError(Exception):
    """Base class for errors raised by the pipeline itself."""


class ConfigError(PipelineError):
    """Config file missing, malformed, or lacking credentials."""


class InputError(PipelineError):
    """The URL list could not be read. Raised before any browser is launched."""


class AuthenticationError(PipelineError):
    """A bounded wait during login ran out, or the landing page never showed up."""


class ExtractionError(PipelineError):
    """Reading the fields of a single inspected URL failed."""


class DetailGroupMismatch(ExtractionError):
    """The page returned fewer detail groups than the configured layout declares."""

    def __init__(self, expected: list[str], found: int):
        self.expected = expected
        self.found = found
        super().__init__(
            f"Expected {len(expected)} detail groups ({', '.join(expected)}), found {found}"
        )
