"""Unit tests for the storage error taxonomy."""

import httpx

from src.storage.errors import (
    ErrorPhase,
    RequestPreparationError,
    ResponseError,
    SendError,
    StorageError,
    ValidationError,
)


def _raise_from(err: StorageError, cause: Exception) -> StorageError:
    try:
        raise err from cause
    except StorageError as e:
        return e


class TestErrorPhases:

    def test_each_subclass_has_its_phase(self):
        assert ValidationError.phase == ErrorPhase.VALIDATION
        assert RequestPreparationError.phase == ErrorPhase.PREPARE
        assert SendError.phase == ErrorPhase.SEND
        assert ResponseError.phase == ErrorPhase.RESPOND

    def test_phase_values(self):
        assert [p.value for p in ErrorPhase] == ["validation", "prepare", "send", "respond"]


class TestRendering:

    def test_without_response_or_cause(self):
        err = SendError("shares.Client", "SetMetaData", "Failure sending request")
        assert str(err) == "shares.Client#SetMetaData: Failure sending request"
        assert err.status_code is None

    def test_with_cause(self):
        err = _raise_from(
            SendError("shares.Client", "SetMetaData", "Failure sending request"),
            httpx.ConnectError("connection reset"),
        )
        assert str(err) == (
            "shares.Client#SetMetaData: Failure sending request -- Original Error: connection reset"
        )

    def test_with_response(self):
        response = httpx.Response(409, headers={"x-ms-error-code": "ShareBeingDeleted"})
        err = ResponseError("shares.Client", "SetMetaData", "Failure responding to request", response)

        assert err.status_code == 409
        assert err.error_code == "ShareBeingDeleted"
        assert str(err) == "shares.Client#SetMetaData: Failure responding to request StatusCode=409"

    def test_error_code_missing(self):
        err = ResponseError("shares.Client", "SetMetaData", "x", httpx.Response(500))
        assert err.error_code is None
        assert ResponseError("shares.Client", "SetMetaData", "x").error_code is None

    def test_validation_message_prefix(self):
        err = ValidationError("shares.Client", "SetMetaData", "`shareName` cannot be an empty string.")
        assert err.message == "Invalid input: `shareName` cannot be an empty string."
        assert isinstance(err, StorageError)
