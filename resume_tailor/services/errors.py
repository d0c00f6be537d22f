"""Error kinds raised by the tailoring pipeline and its surfaces.

Every message is written for the end user; the orchestrator and the HTTP
layer show them verbatim.
"""


class TailorError(Exception):
    """Base class for errors raised by resume_tailor."""

    default_message = "An error occurred during the tailoring process."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class InputValidationError(TailorError):
    """Missing file, wrong MIME type or blank job requirements."""


class PipelineBusyError(TailorError):
    default_message = "Tailoring is already in progress."


class ExtractionError(TailorError):
    default_message = "Please upload a valid PDF file."


class GenerationError(TailorError):
    """The generation backend failed to produce a usable resume."""


class ParseError(GenerationError):
    default_message = "The AI service returned an empty or malformed response."


class ExportError(TailorError):
    default_message = "Failed to generate PDF. Please try again."
