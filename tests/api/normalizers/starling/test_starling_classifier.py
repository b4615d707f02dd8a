"""Testes do classificador de feed items Starling."""

from __future__ import annotations

import json

import pytest

from api.normalizers.starling import StarlingEventClassifier, classify_event, map_source
from app.constants.starling import Direction, TransactionSource
from app.protocols.classifier import EventParseError
from tests.fakes.fake_banking_client import build_feed_item_payload


class TestMapSource:
    """Mapeamento de content.source para TransactionSource."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("MASTER_CARD", TransactionSource.CARD_SPEND),
            ("FASTER_PAYMENTS_IN", TransactionSource.FASTER_PAYMENT_IN),
            ("NOSTRO_DEPOSIT", TransactionSource.NOSTRO_DEPOSIT),
            ("DIRECT_CREDIT", TransactionSource.DIRECT_CREDIT),
            ("master_card", TransactionSource.CARD_SPEND),
        ],
    )
    def test_known_sources(self, raw: str, expected: TransactionSource) -> None:
        assert map_source(raw) is expected

    @pytest.mark.parametrize("raw", ["INTERNAL_TRANSFER", "DIRECT_DEBIT", ""])
    def test_unknown_sources_map_to_other(self, raw: str) -> None:
        assert map_source(raw) is TransactionSource.OTHER


class TestClassifyEvent:
    """Parse do payload completo."""

    def test_card_spend_event(self) -> None:
        event = classify_event(build_feed_item_payload(event_uid="evt-42", minor_units=2499))

        assert event.event_uid == "evt-42"
        assert event.source is TransactionSource.CARD_SPEND
        assert event.raw_source == "MASTER_CARD"
        assert event.direction is Direction.OUT
        assert event.amount.minor_units == 2499
        assert event.amount.currency == "GBP"
        assert event.feed_item_uid == "feed-item-uid-0001"
        assert event.is_actionable is True
        assert event.is_inbound is False

    def test_unknown_source_is_not_actionable(self) -> None:
        event = classify_event(build_feed_item_payload(source="INTERNAL_TRANSFER"))

        assert event.source is TransactionSource.OTHER
        assert event.is_actionable is False

    def test_missing_event_uid_is_accepted_as_empty(self) -> None:
        payload = build_feed_item_payload()
        del payload["webhookEventUid"]

        assert classify_event(payload).event_uid == ""

    def test_extra_fields_are_ignored(self) -> None:
        payload = build_feed_item_payload()
        payload["unexpected"] = {"nested": True}

        assert classify_event(payload).event_uid == "evt-0001"

    def test_negative_amount_rejected(self) -> None:
        with pytest.raises(EventParseError, match="content.amount.minorUnits"):
            classify_event(build_feed_item_payload(minor_units=-100))

    @pytest.mark.parametrize("malformed", [True, "2499", 2499.0, None])
    def test_non_integer_amount_rejected(self, malformed: object) -> None:
        payload = build_feed_item_payload()
        payload["content"]["amount"]["minorUnits"] = malformed  # type: ignore[index]

        with pytest.raises(EventParseError, match="content.amount.minorUnits"):
            classify_event(payload)

    def test_invalid_direction_rejected(self) -> None:
        with pytest.raises(EventParseError, match="content.direction"):
            classify_event(build_feed_item_payload(direction="SIDEWAYS"))

    def test_missing_content_rejected(self) -> None:
        with pytest.raises(EventParseError, match="invalid_feed_item"):
            classify_event({"webhookEventUid": "evt-1"})

    def test_classifier_class_delegates(self) -> None:
        event = StarlingEventClassifier().classify(build_feed_item_payload(source="DIRECT_CREDIT"))
        assert event.source is TransactionSource.DIRECT_CREDIT


class TestClassifyRawBody:
    """Entrada como corpo bruto (bytes)."""

    def test_bytes_payload_is_decoded(self) -> None:
        payload = build_feed_item_payload(event_uid="evt-7", minor_units=150)
        del payload["content"]["amount"]["currency"]  # type: ignore[index]
        body = json.dumps(payload).encode()

        event = classify_event(body)

        assert event.event_uid == "evt-7"
        assert event.amount.currency == "GBP"

    def test_boolean_amount_in_body_rejected(self) -> None:
        body = json.dumps(build_feed_item_payload()).replace("2499", "true").encode()

        with pytest.raises(EventParseError, match="content.amount.minorUnits"):
            classify_event(body)

    def test_malformed_json_rejected(self) -> None:
        with pytest.raises(EventParseError, match="invalid_json"):
            classify_event(b"{not json")
