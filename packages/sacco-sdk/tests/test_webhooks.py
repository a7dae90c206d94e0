"""Unit tests for sacco_sdk.webhooks."""

import hashlib
import hmac
import json
from unittest.mock import MagicMock, patch

import pytest

from sacco_sdk.exceptions import ConfigurationError, SignatureVerificationFailed
from sacco_sdk.types import WebhookEventKind
from sacco_sdk.webhooks import (
    HANDLER_METHODS,
    EventHandler,
    EventRouter,
    WebhookVerifier,
    sign,
)

SECRET = "whsec-test"


def _hmac(body: bytes, secret: str = SECRET) -> str:
    return hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()


def _flip_bit(hex_digest: str, bit: int = 0) -> str:
    raw = bytearray(bytes.fromhex(hex_digest))
    raw[bit // 8] ^= 1 << (bit % 8)
    return raw.hex()


@pytest.fixture
def verifier() -> WebhookVerifier:
    return WebhookVerifier(SECRET)


class TestWebhookVerifier:
    def test_requires_secret(self) -> None:
        with pytest.raises(ConfigurationError):
            WebhookVerifier("")

    @pytest.mark.parametrize(
        "body",
        [b"", b"{}", b'{"event":"transfer.completed","data":{"transactionReference":"tx_1"}}'],
    )
    def test_accepts_correct_signature(self, verifier: WebhookVerifier, body: bytes) -> None:
        assert verifier.verify(body, _hmac(body)) is True

    def test_accepts_prefixed_signature(self, verifier: WebhookVerifier) -> None:
        body = b'{"event":"card.topup"}'
        assert verifier.verify(body, f"sha256={_hmac(body)}") is True

    def test_accepts_upper_case_hex(self, verifier: WebhookVerifier) -> None:
        body = b'{"event":"card.topup"}'
        assert verifier.verify(body, _hmac(body).upper()) is True

    def test_accepts_str_body(self, verifier: WebhookVerifier) -> None:
        body = '{"event":"card.topup"}'
        assert verifier.verify(body, _hmac(body.encode())) is True

    @pytest.mark.parametrize("bit", [0, 7, 100, 255])
    def test_rejects_single_bit_flip(self, verifier: WebhookVerifier, bit: int) -> None:
        body = b'{"event":"transfer.failed"}'
        assert verifier.verify(body, _flip_bit(_hmac(body), bit)) is False

    def test_rejects_other_secret(self, verifier: WebhookVerifier) -> None:
        body = b'{"event":"transfer.failed"}'
        assert verifier.verify(body, _hmac(body, secret="someone-else")) is False

    @pytest.mark.parametrize(
        "signature",
        ["", None, "sha256=deadbeef", "not-hex-at-all", "zz" * 32, "sha256=", "abc"],
    )
    def test_malformed_signature_is_false(
        self, verifier: WebhookVerifier, signature: str | None
    ) -> None:
        assert verifier.verify(b"{}", signature) is False

    def test_rejects_non_canonical_hex_of_correct_digest(self, verifier: WebhookVerifier) -> None:
        body = b'{"event":"card.topup"}'
        digest = _hmac(body)
        spaced = " ".join(digest[i : i + 2] for i in range(0, len(digest), 2))

        assert verifier.verify(body, digest) is True
        assert verifier.verify(body, spaced) is False

    def test_uses_constant_time_comparison(self, verifier: WebhookVerifier) -> None:
        body = b"{}"

        with patch("sacco_sdk.webhooks.hmac.compare_digest", return_value=True) as cmp:
            assert verifier.verify(body, "00" * 32) is True

        cmp.assert_called_once_with(bytes.fromhex(_hmac(body)), b"\x00" * 32)

    def test_require_valid_raises(self, verifier: WebhookVerifier) -> None:
        with pytest.raises(SignatureVerificationFailed):
            verifier.require_valid(b"{}", "sha256=deadbeef")

    def test_sign_matches_hmac(self) -> None:
        assert sign(SECRET, b"payload") == _hmac(b"payload")


class TestEventRouter:
    @pytest.fixture
    def handler(self) -> MagicMock:
        return MagicMock(spec=EventHandler)

    @pytest.fixture
    def router(self, handler: MagicMock) -> EventRouter:
        return EventRouter(handler)

    def test_dispatch_table_covers_every_kind(self) -> None:
        assert set(HANDLER_METHODS) == set(WebhookEventKind)
        for method in HANDLER_METHODS.values():
            assert callable(getattr(EventHandler, method))

    @pytest.mark.parametrize("kind", list(WebhookEventKind))
    def test_dispatches_each_kind(
        self, router: EventRouter, handler: MagicMock, kind: WebhookEventKind
    ) -> None:
        data = {"id": "abc"}

        assert router.process({"event": kind.value, "data": data}) == kind

        getattr(handler, HANDLER_METHODS[kind]).assert_called_once_with(data)
        others = [m for k, m in HANDLER_METHODS.items() if k != kind]
        for method in others:
            getattr(handler, method).assert_not_called()

    @pytest.mark.parametrize(
        "payload",
        [
            {"event": "unknown.event", "data": {}},
            {"data": {"id": "abc"}},
            {"event": None},
            ["card.created"],
            "card.created",
        ],
    )
    def test_unroutable_payload_is_discarded(
        self, router: EventRouter, handler: MagicMock, payload: object
    ) -> None:
        assert router.process(payload) is None

        for method in HANDLER_METHODS.values():
            getattr(handler, method).assert_not_called()

    def test_handler_failure_does_not_propagate(
        self, router: EventRouter, handler: MagicMock
    ) -> None:
        handler.on_transfer_completed.side_effect = RuntimeError("db down")

        kind = router.process({"event": "transfer.completed", "data": {}})

        assert kind == WebhookEventKind.TRANSFER_COMPLETED

    def test_out_of_order_delivery(self, router: EventRouter, handler: MagicMock) -> None:
        router.process({"event": "transfer.completed", "data": {"transactionReference": "tx_1"}})
        router.process({"event": "transfer.initiated", "data": {"transactionReference": "tx_1"}})

        assert [c[0] for c in handler.method_calls] == [
            "on_transfer_completed",
            "on_transfer_initiated",
        ]

    def test_missing_data_is_passed_as_none(
        self, router: EventRouter, handler: MagicMock
    ) -> None:
        router.process({"event": "card.frozen"})
        handler.on_card_frozen.assert_called_once_with(None)

    def test_default_handler_only_logs(self, caplog: pytest.LogCaptureFixture) -> None:
        router = EventRouter()

        with caplog.at_level("INFO", logger="sacco_sdk.webhooks"):
            router.process(json.loads('{"event": "card.topup", "data": {"amount": 5}}'))

        assert "Card topped up" in caplog.text
