"""Testes end-to-end do pipeline de feed items (sem IO externo)."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from app.bootstrap.dependencies import create_process_feed_item
from app.domain.transfer import ProcessingOutcome
from app.infra.starling.errors import StarlingApiError
from app.infra.stores import MemoryDedupeStore
from app.use_cases.feed_item import ProcessFeedItemUseCase
from config.settings import DedupeSettings, PolicySettings, StarlingSettings
from tests.fakes.fake_banking_client import FakeBankingClient, build_feed_item_payload
from utils.errors import RedisConnectionError

POLICY = PolicySettings(
    roundup_goal_uid="roundup-goal-uid",
    sweep_goal_uid="sweep-goal-uid",
    sweep_threshold=100000,
)
STARLING = StarlingSettings(access_token="token", account_uid="account-uid-0001")


def _use_case(
    bank: FakeBankingClient,
    store: MemoryDedupeStore | None = None,
    policy: PolicySettings = POLICY,
) -> ProcessFeedItemUseCase:
    return create_process_feed_item(
        policy=policy,
        starling=STARLING,
        dedupe=DedupeSettings(),
        dedupe_store=store or MemoryDedupeStore(),
        banking_client=bank,
    )


async def test_card_spend_transfers_round_up() -> None:
    bank = FakeBankingClient()

    result = await _use_case(bank).execute(payload=build_feed_item_payload(minor_units=2499))

    assert result.outcome is ProcessingOutcome.TRANSFERRED
    assert result.reason == "round_up"
    assert result.amount_minor_units == 1
    assert result.transfer_uid == "transfer-1"
    assert bank.transfers[0].goal_uid == "roundup-goal-uid"


async def test_received_log_carries_masked_identifiers(caplog: pytest.LogCaptureFixture) -> None:
    bank = FakeBankingClient()

    with caplog.at_level("INFO"):
        await _use_case(bank).execute(payload=build_feed_item_payload(event_uid="evt-0001-abcdef"))

    (record,) = [r for r in caplog.records if r.getMessage() == "feed_item_received"]
    assert record.feed_item_uid == "feed-ite..."
    assert record.event_uid == "evt-0001..."
    assert record.amount_minor_units == 2499


async def test_salary_is_swept() -> None:
    bank = FakeBankingClient(balance_minor_units=275412)
    payload = build_feed_item_payload(
        source="FASTER_PAYMENTS_IN",
        direction="IN",
        minor_units=250000,
    )

    result = await _use_case(bank).execute(payload=payload)

    assert result.outcome is ProcessingOutcome.TRANSFERRED
    assert result.amount_minor_units == 25412
    assert bank.transfers[0].goal_uid == "sweep-goal-uid"


async def test_duplicate_delivery_transfers_once_and_writes_once() -> None:
    """Reentrega do mesmo webhookEventUid: uma transferência, uma escrita."""
    bank = FakeBankingClient()
    store = MemoryDedupeStore()
    use_case = _use_case(bank, store)
    payload = build_feed_item_payload(event_uid="evt-dup")

    first = await use_case.execute(payload=payload)
    second = await use_case.execute(payload=payload)

    assert first.outcome is ProcessingOutcome.TRANSFERRED
    assert second.outcome is ProcessingOutcome.DUPLICATE
    assert len(bank.transfers) == 1
    assert store.writes == 1


async def test_unknown_source_is_ignored() -> None:
    bank = FakeBankingClient()

    result = await _use_case(bank).execute(
        payload=build_feed_item_payload(source="INTERNAL_TRANSFER")
    )

    assert result.outcome is ProcessingOutcome.IGNORED
    assert bank.transfers == []
    assert bank.balance_calls == 0


async def test_below_threshold_is_no_op_without_balance_read() -> None:
    bank = FakeBankingClient(balance_minor_units=999999)
    payload = build_feed_item_payload(source="DIRECT_CREDIT", direction="IN", minor_units=500)

    result = await _use_case(bank).execute(payload=payload)

    assert result.outcome is ProcessingOutcome.NO_OP
    assert result.reason == "below_threshold"
    assert bank.balance_calls == 0


@pytest.mark.parametrize("balance_minor_units", [250000, 200000, 0])
async def test_sweep_skipped_when_balance_before_not_positive(balance_minor_units: int) -> None:
    bank = FakeBankingClient(balance_minor_units=balance_minor_units)
    payload = build_feed_item_payload(
        source="FASTER_PAYMENTS_IN",
        direction="IN",
        minor_units=250000,
    )

    result = await _use_case(bank).execute(payload=payload)

    assert result.outcome is ProcessingOutcome.NO_OP
    assert result.reason == "non_positive_balance_before"
    assert bank.balance_calls == 1
    assert bank.transfers == []


async def test_no_goal_for_source_is_no_op() -> None:
    bank = FakeBankingClient()
    policy = PolicySettings(sweep_goal_uid="sweep-goal-uid", sweep_threshold=100000)

    result = await _use_case(bank, policy=policy).execute(payload=build_feed_item_payload())

    assert result.outcome is ProcessingOutcome.NO_OP
    assert result.reason == "no_roundup_goal"


async def test_dry_run_decides_without_transfer() -> None:
    bank = FakeBankingClient()

    result = await _use_case(bank).execute(payload=build_feed_item_payload(), dry_run=True)

    assert result.outcome is ProcessingOutcome.DRY_RUN
    assert result.amount_minor_units == 1
    assert bank.transfers == []


async def test_invalid_payload_fails_without_dedupe_write() -> None:
    store = MemoryDedupeStore()

    result = await _use_case(FakeBankingClient(), store).execute(payload={"content": {}})

    assert result.outcome is ProcessingOutcome.FAILED
    assert result.reason == "invalid_payload"
    assert store.writes == 0


async def test_cache_unavailable_stops_pipeline() -> None:
    bank = FakeBankingClient()
    store = MagicMock()
    store.check_and_set = AsyncMock(side_effect=RedisConnectionError("down"))
    use_case = create_process_feed_item(
        policy=POLICY,
        starling=STARLING,
        dedupe=DedupeSettings(),
        dedupe_store=store,
        banking_client=bank,
    )

    result = await use_case.execute(payload=build_feed_item_payload())

    assert result.outcome is ProcessingOutcome.FAILED
    assert result.reason == "cache_unavailable"
    assert bank.transfers == []


async def test_balance_failure_fails_without_transfer() -> None:
    bank = FakeBankingClient(balance_error=StarlingApiError("starling_timeout"))
    payload = build_feed_item_payload(source="NOSTRO_DEPOSIT", direction="IN", minor_units=250000)

    result = await _use_case(bank).execute(payload=payload)

    assert result.outcome is ProcessingOutcome.FAILED
    assert result.reason == "balance_fetch_failed"
    assert bank.transfers == []


async def test_transfer_failure_is_reported(caplog: pytest.LogCaptureFixture) -> None:
    bank = FakeBankingClient(transfer_error=StarlingApiError("starling_http_400", 400, "bad"))

    with caplog.at_level("ERROR"):
        result = await _use_case(bank).execute(payload=build_feed_item_payload())

    assert result.outcome is ProcessingOutcome.FAILED
    assert result.reason == "transfer_failed"
    assert "transfer_failed" in caplog.text


def test_factory_requires_a_bank_client() -> None:
    with pytest.raises(ValueError):
        create_process_feed_item(
            policy=POLICY,
            starling=STARLING,
            dedupe=DedupeSettings(),
            dedupe_store=MemoryDedupeStore(),
        )
