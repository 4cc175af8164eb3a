from datetime import datetime, timedelta, timezone

import pytest

from silverbrain.ksuid import EPOCH, ksuid_timestamp, new_ksuid


def test_length_and_alphabet():
    value = new_ksuid()
    assert len(value) == 27
    assert value.isalnum()


def test_timestamp_round_trip_to_the_second():
    moment = datetime(2023, 9, 20, 1, 0, 0, 654321, tzinfo=timezone.utc)
    assert ksuid_timestamp(new_ksuid(moment)) == moment.replace(microsecond=0)


def test_naive_moment_is_utc():
    moment = datetime(2022, 5, 6, 7, 8, 9)
    assert ksuid_timestamp(new_ksuid(moment)) == moment.replace(tzinfo=timezone.utc)


def test_offset_moment_is_converted():
    zone = timezone(timedelta(hours=5))
    moment = datetime(2021, 1, 2, 3, 4, 5, tzinfo=zone)
    assert ksuid_timestamp(new_ksuid(moment)) == moment


def test_ids_are_unique():
    moment = datetime(2023, 1, 1, tzinfo=timezone.utc)
    values = {new_ksuid(moment) for _ in range(100)}
    assert len(values) == 100


def test_later_ids_sort_after_earlier():
    early = new_ksuid(datetime(2020, 1, 1, tzinfo=timezone.utc))
    late = new_ksuid(datetime(2020, 1, 2, tzinfo=timezone.utc))
    assert early < late


def test_now_is_close_to_current_time():
    before = datetime.now(timezone.utc).replace(microsecond=0)
    stamp = ksuid_timestamp(new_ksuid())
    after = datetime.now(timezone.utc)
    assert before <= stamp <= after


def test_minimum_value_is_epoch():
    assert ksuid_timestamp("0" * 27) == datetime.fromtimestamp(EPOCH, timezone.utc)


def test_known_example():
    assert ksuid_timestamp("0ujtsYcgvSTl8PAuAdqWYSMnLOv") == datetime(
        2017, 10, 10, 4, 0, 47, tzinfo=timezone.utc
    )


def test_before_epoch_is_rejected():
    with pytest.raises(ValueError):
        new_ksuid(datetime(2000, 1, 1, tzinfo=timezone.utc))


@pytest.mark.parametrize("value", ["short", "0" * 26 + "-", "z" * 27, "0" * 28])
def test_invalid_values_are_rejected(value):
    with pytest.raises(ValueError):
        ksuid_timestamp(value)