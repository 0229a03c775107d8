"""Tests for the fuzz campaign runner."""

import json

import pytest
from vsa_testkit.campaign import main, run_campaign
from vsa_testkit.errors import ContractViolation
from vsa_testkit.integrity import IntegrityValidator

SMALL = dict(dims=512, sparsity=16, iterations=3, buffer_size=256, packet_size=16)


def test_campaign_reference_engine_is_clean():
    result = run_campaign(seed=7, **SMALL)
    assert result.engine.is_ok()
    assert result.engine.checks_total > 0
    assert result.latency_ms >= 0.0


def test_campaign_without_damage_has_clean_resilience():
    result = run_campaign(seed=7, error_rate=0.0, loss_rate=0.0, erasures=0, **SMALL)
    assert result.resilience.is_ok()
    assert result.stats == {
        "flip_events": 0,
        "packets_dropped": 0,
        "bytes_erased": 0,
        "unreadable_snapshots": 0,
    }


def test_campaign_detects_injected_damage():
    result = run_campaign(seed=7, error_rate=0.05, loss_rate=0.25, erasures=8, **SMALL)
    assert result.engine.is_ok()
    assert not result.resilience.is_ok()
    assert result.stats["flip_events"] > 0
    assert result.resilience.bitflips_detected + result.resilience.corruption_events > 0


def test_campaign_is_reproducible():
    first = run_campaign(seed=11, error_rate=0.05, **SMALL)
    second = run_campaign(seed=11, error_rate=0.05, **SMALL)
    assert first.engine == second.engine
    assert first.resilience == second.resilience
    assert first.stats == second.stats


def test_campaign_flags_broken_engine():
    broken = IntegrityValidator(bind=lambda a, b: a)
    result = run_campaign(seed=3, validator=broken, **SMALL)
    assert not result.engine.is_ok()
    assert result.engine.invariant_violations == SMALL["iterations"]


def test_campaign_rejects_bad_shape():
    with pytest.raises(ContractViolation):
        run_campaign(dims=8, sparsity=16, iterations=1)


def test_main_writes_report(tmp_path, capsys):
    report_path = tmp_path / "out" / "campaign.json"
    code = main([
        "--dims", "512",
        "--sparsity", "16",
        "--iterations", "2",
        "--buffer-size", "128",
        "--report", str(report_path),
    ])
    assert code == 0
    out = capsys.readouterr().out
    assert "[engine]" in out
    assert "[resilience]" in out

    report = json.loads(report_path.read_text(encoding="utf-8"))
    assert report["engine"]["ok"] is True
    assert set(report) == {"engine", "resilience", "stats", "latency_ms"}


def test_main_reports_contract_violation():
    with pytest.raises(SystemExit) as excinfo:
        main(["--dims", "4", "--sparsity", "8", "--iterations", "1"])
    assert excinfo.value.code == 2
