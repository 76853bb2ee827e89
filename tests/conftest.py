"""
Pytest fixtures for trustfeed tests. Isolates TRUSTFEED_* env vars and provides
the small reference graph used across component tests.
"""

from __future__ import annotations

import os

import pytest

from trustfeed.analysis_engine.models import TopicRecord, TransactionRecord

A = "0xaaaa000000000000000000000000000000000001"
B = "0xbbbb000000000000000000000000000000000002"
C = "0xcccc000000000000000000000000000000000003"
D = "0xdddd000000000000000000000000000000000004"
E = "0xeeee000000000000000000000000000000000005"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Drop any TRUSTFEED_* settings inherited from the shell so defaults apply."""
    for name in list(os.environ):
        if name.startswith("TRUSTFEED_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def reference_records() -> list[TransactionRecord]:
    """A->B 10, A->C 10, B->A 5; C is dangling."""
    return [
        TransactionRecord(A, B, 10),
        TransactionRecord(A, C, 10),
        TransactionRecord(B, A, 5),
    ]


@pytest.fixture
def chain_records() -> list[TransactionRecord]:
    """A->B->C->D->E: E is four hops from A."""
    return [
        TransactionRecord(A, B, 1),
        TransactionRecord(B, C, 1),
        TransactionRecord(C, D, 1),
        TransactionRecord(D, E, 1),
    ]


@pytest.fixture
def topic_records() -> list[TopicRecord]:
    return [
        TopicRecord(B, "defi", 90),
        TopicRecord(C, "defi", 95),
        TopicRecord(C, "nft", 100),
        TopicRecord(E, "defi", 100),
    ]


def write_csv(path, header: str, lines: list[str]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join([header, *lines]) + "\n", encoding="utf-8")
