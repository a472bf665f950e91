"""Tests for ULID-based request ids."""

from btx.models.ids import (
    REQUEST_ID_PREFIX,
    generate_id,
    generate_request_id,
)


class TestGenerateId:
    def test_generate_id_is_26_chars(self) -> None:
        assert len(generate_id()) == 26

    def test_generate_id_is_unique(self) -> None:
        ids = {generate_id() for _ in range(1000)}
        assert len(ids) == 1000


class TestGenerateRequestId:
    def test_has_prefix(self) -> None:
        request_id = generate_request_id()
        assert request_id.startswith(REQUEST_ID_PREFIX)
        assert len(request_id) == len(REQUEST_ID_PREFIX) + 26

