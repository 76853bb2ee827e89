"""
Tests for topic relevance scoring (topic_scorer.score / decay).
"""

from __future__ import annotations

import math

import pytest

from conftest import A, B, C, E

from trustfeed.analysis_engine.matrix import Vector
from trustfeed.analysis_engine.models import TopicRecord
from trustfeed.analysis_engine.topic_scorer import decay, latest_topic_timestamps, score
from trustfeed.core.exceptions import ContractViolation

VICINITY = [A, B, C]
INDEX = {A: 0, B: 1, C: 2}
SCORES = Vector([0.2, 0.4, 0.4])


def test_decay_reference_example():
    assert decay(100, 90, 0.7) == pytest.approx(0.0282475249)
    assert decay(100, 90, 0.7) * 0.4 == pytest.approx(0.0113, abs=1e-4)


def test_decay_edge_inputs_are_valid():
    assert decay(100, 100, 0.7) == 1.0
    assert decay(90, 100, 0.5) == pytest.approx(1024.0)
    assert decay(100, 90, 1.5) > 1.0


def test_single_contribution():
    out = score(VICINITY, INDEX, SCORES, [TopicRecord(B, "defi", 90)], now_hours=100, decay_rate=0.7)
    assert out == {"defi": pytest.approx(0.7**10 * 0.4)}


def test_contributions_sum_per_topic(topic_records):
    out = score(VICINITY, INDEX, SCORES, topic_records, now_hours=100, decay_rate=0.7)
    assert set(out) == {"defi", "nft"}
    assert out["defi"] == pytest.approx(0.7**10 * 0.4 + 0.7**5 * 0.4)
    assert out["nft"] == pytest.approx(0.4)


def test_addresses_outside_vicinity_excluded():
    records = [TopicRecord(E, "gaming", 100), TopicRecord(B, "defi", 100)]
    out = score(VICINITY, INDEX, SCORES, records, now_hours=100)
    assert "gaming" not in out
    assert out == {"defi": pytest.approx(0.4)}


def test_outside_vicinity_excluded_even_if_indexed():
    # mapping carries E but vicinity does not: E must still be skipped
    index = {**INDEX, E: 0}
    out = score(VICINITY, index, SCORES, [TopicRecord(E, "gaming", 100)], now_hours=100)
    assert out == {}


def test_last_record_wins_for_duplicate_pair():
    records = [TopicRecord(B, "defi", 100), TopicRecord(B, "defi", 90)]
    assert latest_topic_timestamps(records) == {(B, "defi"): 90}
    out = score(VICINITY, INDEX, SCORES, records, now_hours=100, decay_rate=0.7)
    assert out["defi"] == pytest.approx(0.7**10 * 0.4)


def test_first_seen_topic_order(topic_records):
    out = score(VICINITY, INDEX, SCORES, topic_records, now_hours=100)
    assert list(out) == ["defi", "nft"]


def test_missing_index_mapping_fails_loudly():
    with pytest.raises(ContractViolation):
        score(VICINITY, {A: 0}, SCORES, [TopicRecord(B, "defi", 100)], now_hours=100)


def test_no_records():
    assert score(VICINITY, INDEX, SCORES, [], now_hours=100) == {}


def test_decay_beyond_float_range_is_inf():
    # timestamp 3000 hours in the future at rate 0.7
    assert decay(100, 3100, 0.7) == math.inf
    assert decay(5000, 0, 1.5) == math.inf
    assert decay(5000, 0, 0.7) == 0.0


def test_future_timestamp_overflow_does_not_raise():
    out = score(VICINITY, INDEX, SCORES, [TopicRecord(B, "defi", 3100)], now_hours=100, decay_rate=0.7)
    assert out == {"defi": math.inf}


def test_zero_trust_address_contributes_nothing_on_overflow():
    scores = Vector([0.5, 0.0, 0.5])
    records = [TopicRecord(B, "defi", 3100), TopicRecord(C, "defi", 100)]
    out = score(VICINITY, INDEX, scores, records, now_hours=100, decay_rate=0.7)
    assert not math.isnan(out["defi"])
    assert out["defi"] == pytest.approx(0.5)
