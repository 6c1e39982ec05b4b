"""Unit tests for the Result type."""
import pytest

from parallelclient import Err, ErrorKind, Ok, ParallelClientError, ParallelError


class TestResult:
    """Tests for Ok and Err."""

    def test_ok(self):
        result = Ok(2)
        assert result.is_ok()
        assert result.unwrap() == 2
        assert result.map(lambda v: v * 3).unwrap() == 6
        assert result.map_err(str) is result

    def test_err_unwrap_raises_client_error(self):
        error = ParallelError(ErrorKind.API, "API error: 401 Unauthorized — invalid api key", status_code=401)

        with pytest.raises(ParallelClientError) as excinfo:
            Err(error).unwrap()

        assert excinfo.value.error is error
        assert excinfo.value.kind == ErrorKind.API
        assert str(excinfo.value) == "API error: 401 Unauthorized — invalid api key"

    def test_err_unwrap_with_plain_error(self):
        with pytest.raises(ValueError):
            Err("nope").unwrap()

    def test_err_defaults_and_mapping(self):
        result = Err("nope")
        assert result.is_err()
        assert result.unwrap_or(5) == 5
        assert result.map(lambda v: v * 3) is result
        assert result.map_err(str.upper).error == "NOPE"
