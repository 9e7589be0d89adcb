import math
from datetime import datetime, timedelta, timezone

import pytest

from statusio.core.time_converter import (
    EPOCH_PLAUSIBILITY_THRESHOLD,
    EXPIRED,
    SECONDS_PER_DAY,
    ceil_days,
    from_absolute_epoch,
    from_datetime,
    from_duration,
    looks_like_epoch,
    parse_timestamp,
)

NOW = datetime(2026, 10, 16, 12, 0, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("seconds", [1, 59, 86399, 86400, 86401, 172800, 30 * 86400 + 5, 0.5])
def test_from_duration_rounds_up_and_is_in_future(seconds):
    out = from_duration(seconds, now=NOW)
    assert out.days_remaining == math.ceil(seconds / SECONDS_PER_DAY)
    assert out.expires_at > NOW
    assert out.expires_at == NOW + timedelta(seconds=seconds)


def test_one_second_left_is_one_day():
    assert from_duration(1, now=NOW).days_remaining == 1
    assert from_absolute_epoch(NOW.timestamp() + 1, now=NOW).days_remaining == 1


@pytest.mark.parametrize("bad", [0, -1, -86400, None, "", "abc", float("nan"), float("inf"), float("-inf"), True, False, [], {}])
def test_invalid_inputs_return_expired(bad):
    assert from_duration(bad, now=NOW) == EXPIRED
    assert from_absolute_epoch(bad, now=NOW) == EXPIRED
    assert EXPIRED.days_remaining == 0
    assert EXPIRED.expires_at is None


def test_from_absolute_epoch_future_instant():
    instant = NOW + timedelta(days=5)
    out = from_absolute_epoch(instant.timestamp(), now=NOW)
    assert out.days_remaining == 5
    assert out.expires_at == instant


def test_from_absolute_epoch_partial_day_rounds_up():
    instant = NOW + timedelta(days=2, hours=1)
    assert from_absolute_epoch(instant.timestamp(), now=NOW).days_remaining == 3


def test_from_absolute_epoch_past_or_now_is_expired():
    assert from_absolute_epoch((NOW - timedelta(days=1)).timestamp(), now=NOW) == EXPIRED
    assert from_absolute_epoch(NOW.timestamp(), now=NOW) == EXPIRED


def test_from_absolute_epoch_accepts_numeric_string():
    instant = NOW + timedelta(days=10)
    out = from_absolute_epoch(str(int(instant.timestamp())), now=NOW)
    assert out.days_remaining == 10


def test_from_absolute_epoch_is_idempotent_with_frozen_clock():
    epoch = (NOW + timedelta(days=7, minutes=3)).timestamp()
    assert from_absolute_epoch(epoch, now=NOW) == from_absolute_epoch(epoch, now=NOW)


def test_from_absolute_epoch_overflow_is_expired():
    assert from_absolute_epoch(1e20, now=NOW) == EXPIRED
    assert from_absolute_epoch(10**400, now=NOW) == EXPIRED
    assert from_duration(10**400, now=NOW) == EXPIRED


def test_from_datetime_treats_naive_as_utc():
    naive = datetime(2026, 10, 20, 12, 0, 0)
    out = from_datetime(naive, now=NOW)
    assert out.days_remaining == 4
    assert out.expires_at.tzinfo is not None


def test_ceil_days_never_negative():
    assert ceil_days(-500) == 0
    assert ceil_days(0) == 0


def test_looks_like_epoch_threshold():
    assert looks_like_epoch(EPOCH_PLAUSIBILITY_THRESHOLD + 1)
    assert looks_like_epoch(str(EPOCH_PLAUSIBILITY_THRESHOLD + 1))
    assert not looks_like_epoch(EPOCH_PLAUSIBILITY_THRESHOLD)
    assert not looks_like_epoch(172800)
    assert not looks_like_epoch("2026-10-21T00:00:00Z")
    assert not looks_like_epoch(True)
    assert not looks_like_epoch(None)
    assert not looks_like_epoch(10**400)


def test_parse_timestamp_variants():
    assert parse_timestamp("2026-10-21T00:00:00.000Z") == datetime(2026, 10, 21, tzinfo=timezone.utc)
    assert parse_timestamp("2026-10-21T02:00:00+02:00") == datetime(2026, 10, 21, tzinfo=timezone.utc)
    assert parse_timestamp("2026-10-21") == datetime(2026, 10, 21, tzinfo=timezone.utc)
    assert parse_timestamp("not a date") is None
    assert parse_timestamp("") is None
    assert parse_timestamp(12345) is None
