"""
End-to-end tests for the trust pipeline and CLI runner.

Uses temporary CSV datasets; now_hours is pinned so topic decay is deterministic.
"""

from __future__ import annotations

import pandas as pd
import pytest

from conftest import A, B, C, D, E, write_csv

from trustfeed.analysis_engine.models import TransactionRecord
from trustfeed.analytics.pipeline import current_hours, run_phase1, run_phase2, run_pipeline
from trustfeed.config import Settings
from trustfeed.core.exceptions import IOFailure, MalformedRecord
from trustfeed.tools.run_pipeline import main


def _write_inputs(base):
    data = base / "data"
    write_csv(
        data / "eoa-to-eoa.csv",
        "from,to,value",
        [f"{A},{B},10", f"{A},{C},10", f"{B},{A},5", f"{D},{A},99"],
    )
    write_csv(
        data / "eoa-to-topic.csv",
        "from,topic,timestamp",
        [f"{B},defi,90", f"{C},nft,100", f"{D},spam,100"],
    )
    return data


def test_phase1_reference_example(reference_records):
    result = run_phase1(reference_records, A, iterations=1, pre_trust_weight=0.2)
    assert result.vicinity == [A, B, C]
    assert result.global_scores.tolist() == pytest.approx([0.2, 0.4, 0.4])
    assert result.index_mapping == {A: 0, B: 1, C: 2}
    assert result.score_of(B) == pytest.approx(0.4)
    assert "index_mapping" not in result.to_dict()


def test_phase1_seed_without_edges():
    result = run_phase1([TransactionRecord(B, C, 1)], A, iterations=3)
    assert result.vicinity == [A]
    assert result.global_scores.tolist() == pytest.approx([0.2])


def test_phase1_exclude_seed_loops(reference_records):
    result = run_phase1(reference_records, A, iterations=1, exclude_seed_loops=True)
    # first round only reads the seed row, which is unchanged
    assert result.global_scores.tolist() == pytest.approx([0.2, 0.4, 0.4])
    two = run_phase1(reference_records, A, iterations=2, exclude_seed_loops=True)
    # B now spreads to A and C instead of sending everything back to A
    assert two.global_scores[2] > run_phase1(reference_records, A, iterations=2).global_scores[2]


def test_phase2_uses_phase1_scores(reference_records, topic_records):
    phase1 = run_phase1(reference_records, A, iterations=1)
    phase2 = run_phase2(phase1, topic_records, now_hours=100, decay_rate=0.7)
    scores = dict(phase2.rows())
    assert scores["defi"] == pytest.approx(0.7**10 * 0.4 + 0.7**5 * 0.4)
    assert scores["nft"] == pytest.approx(0.4)
    assert len(phase2.relevant_topics) == len(phase2.topic_scores)


def test_phase2_defaults_to_wall_clock(reference_records, topic_records):
    phase1 = run_phase1(reference_records, A, iterations=1)
    phase2 = run_phase2(phase1, topic_records)
    # timestamps near zero hours are decades old: contributions underflow toward 0
    assert all(s == pytest.approx(0.0) for s in phase2.topic_scores)
    assert current_hours() > 400_000


def test_run_pipeline_writes_outputs(tmp_path):
    data = _write_inputs(tmp_path)
    settings = Settings(seed_address=A, num_iterations=1, now_hours=100, data_dir=tmp_path)
    phase1, phase2 = run_pipeline(settings)

    peers = pd.read_csv(data / "peers.csv")
    assert peers["address"].tolist() == [A, B, C]
    assert peers["score"].tolist() == pytest.approx([0.2, 0.4, 0.4])
    assert D not in peers["address"].tolist()

    topics = pd.read_csv(data / "topics.csv")
    got = dict(zip(topics["topic"], topics["score"]))
    assert set(got) == {"defi", "nft"}
    assert got["defi"] == pytest.approx(0.7**10 * 0.4)
    assert phase2.relevant_topics == list(got)
    assert phase1.vicinity == [A, B, C]


def test_run_pipeline_missing_input(tmp_path):
    settings = Settings(seed_address=A, data_dir=tmp_path)
    with pytest.raises(IOFailure):
        run_pipeline(settings)
    assert not (tmp_path / "peers.csv").exists()


def test_run_pipeline_malformed_input(tmp_path):
    data = _write_inputs(tmp_path)
    write_csv(data / "eoa-to-eoa.csv", "from,to,value", [f"{A},{B},lots"])
    with pytest.raises(MalformedRecord):
        run_pipeline(Settings(seed_address=A, data_dir=tmp_path))
    assert not (data / "peers.csv").exists()


def test_cli_success(tmp_path):
    data = _write_inputs(tmp_path)
    out = tmp_path / "results" / "peers.csv"
    code = main(
        [
            "--seed", A,
            "--data-dir", str(tmp_path),
            "--iterations", "1",
            "--now-hours", "100",
            "--peers-out", str(out),
        ]
    )
    assert code == 0
    assert pd.read_csv(out)["score"].tolist() == pytest.approx([0.2, 0.4, 0.4])
    assert (data / "topics.csv").exists()


def test_cli_explicit_paths_and_depth(tmp_path):
    tx = tmp_path / "in" / "tx.csv"
    topics = tmp_path / "in" / "topics.csv"
    write_csv(tx, "from,to,value,timestamp", [f"{A},{B},1,0", f"{B},{C},1,0", f"{C},{E},1,0"])
    write_csv(topics, "from,topic,timestamp", [f"{E},far,100"])
    peers_out = tmp_path / "o" / "peers.csv"
    topics_out = tmp_path / "o" / "topics.csv"
    code = main(
        [
            "--seed", A,
            "--transactions", str(tx),
            "--topics", str(topics),
            "--peers-out", str(peers_out),
            "--topics-out", str(topics_out),
            "--depth-limit", "1",
            "--now-hours", "100",
        ]
    )
    assert code == 0
    assert pd.read_csv(peers_out)["address"].tolist() == [A, B]
    assert pd.read_csv(topics_out).empty


def test_cli_failure_exit_code(tmp_path):
    assert main(["--data-dir", str(tmp_path)]) == 1


def test_cli_undecodable_input_exit_code(tmp_path):
    data = _write_inputs(tmp_path)
    (data / "eoa-to-eoa.csv").write_bytes(b"from,to,value\n" + A.encode() + b",\xff\xfe,10\n")
    assert main(["--seed", A, "--data-dir", str(tmp_path), "--now-hours", "100"]) == 1
    assert not (data / "peers.csv").exists()
