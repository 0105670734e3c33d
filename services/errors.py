"""Failure kinds raised by the pipeline and the status each one maps to."""

from __future__ import annotations


class PipelineError(Exception):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadRequestError(PipelineError):
    """Malformed or missing input."""

    status_code = 400


class PostalCodeValidationError(PipelineError):
    """Well-formed input holding a postal code of the wrong shape."""

    status_code = 422


class NotFoundError(PipelineError):
    status_code = 404


class UpstreamError(PipelineError):
    """A third-party call failed or returned data we cannot use."""

    status_code = 500


class InternalError(PipelineError):
    status_code = 500


class RelayedError(PipelineError):
    """Error reported by the resolver, re-surfaced with its own status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code


class ClientDisconnectedError(PipelineError):
    """The caller went away before the response was ready."""

    status_code = 499
