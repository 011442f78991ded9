"""Exception types shared by the simplification pipeline and the API."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from decipher.simplification.models import ModelAttempt


class DecipherError(Exception):
    """Base class for errors raised by the pipeline."""


class InputError(DecipherError):
    """The request carried no usable text; no backend was called."""


class MissingCredentialsError(DecipherError):
    """A backend in the model chain has no API key configured."""


class AllModelsFailedError(DecipherError):
    """Every model in the fallback chain failed.

    ``attempts`` keeps the full per-model diagnostic in attempt order.
    """

    def __init__(self, attempts: list[ModelAttempt]) -> None:
        self.attempts = list(attempts)
        detail = "; ".join(f"{a.model}: {a.error}" for a in self.attempts)
        super().__init__(f"All models failed: {detail}" if detail else "All models failed: no models configured")
