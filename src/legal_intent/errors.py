"""Error types raised by the intent core."""


class LegalIntentError(Exception):
    """Base class for errors raised by this package."""


class InvalidBudgetError(LegalIntentError, ValueError):
    """Raised when a caller passes a reasoning budget outside quick|standard|deep."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(
            f"Unknown reasoning budget {value!r}; expected one of quick, standard, deep"
        )


class CompletionError(LegalIntentError):
    """Raised by completion services when the provider returns nothing usable."""
