"""Smoke tests for the Typer CLI."""

from __future__ import annotations

import wave
from pathlib import Path

import numpy as np
import pytest
import typer
from typer.testing import CliRunner

from warbler.cli.base import BaseCLI, format_result
from warbler.cli.main import app

runner = CliRunner()


def _write_wav(path: Path, sr: int = 16000, duration_sec: float = 0.5) -> None:
    n = int(sr * duration_sec)
    y = 0.5 * np.sin(2 * np.pi * 1000.0 * np.arange(n) / sr)
    with wave.open(str(path), "wb") as w:
        w.setnchannels(1)
        w.setsampwidth(2)
        w.setframerate(sr)
        w.writeframes((y * 32767).astype(np.int16).tobytes())


@pytest.mark.integration
def test_features_command_writes_vector(tmp_path: Path) -> None:
    wav = tmp_path / "bird.wav"
    _write_wav(wav)
    out_dir = tmp_path / "out"

    result = runner.invoke(
        app,
        ["features", "--preset", "simple", "--output-dir", str(out_dir), "--no-log", str(wav)],
    )

    assert result.exit_code == 0, result.output
    assert "✓ features" in result.output
    assert np.load(out_dir / "bird_mfcc_simple.npy").shape == (13,)


@pytest.mark.integration
def test_features_command_dimension_mismatch_exits_nonzero(tmp_path: Path) -> None:
    wav = tmp_path / "bird.wav"
    _write_wav(wav)

    result = runner.invoke(
        app,
        [
            "features",
            "--preset",
            "enhanced",
            "--expected-dim",
            "13",
            "--output-dir",
            str(tmp_path / "out"),
            "--no-log",
            str(wav),
        ],
    )

    assert result.exit_code == 1
    assert "Expected a 13-D feature vector, got 60-D" in result.output


@pytest.mark.integration
def test_dataset_command(tmp_path: Path) -> None:
    a = tmp_path / "a"
    b = tmp_path / "b"
    a.mkdir()
    b.mkdir()
    _write_wav(a / "1.wav")
    _write_wav(b / "2.wav", sr=22050)
    out = tmp_path / "ds.npz"

    result = runner.invoke(app, ["dataset", "--output", str(out), "--no-log", str(a), str(b)])

    assert result.exit_code == 0, result.output
    with np.load(out) as z:
        assert z["features"].shape == (2, 13)
        assert z["class_names"].tolist() == ["a", "b"]


@pytest.mark.integration
def test_dataset_command_missing_class_dir_exits_nonzero(tmp_path: Path) -> None:
    a = tmp_path / "robin"
    a.mkdir()
    _write_wav(a / "1.wav")
    out = tmp_path / "ds.npz"

    result = runner.invoke(
        app, ["dataset", "--output", str(out), "--no-log", str(a), str(tmp_path / "wrenn")]
    )

    assert result.exit_code == 1
    assert "Class directory not found" in result.output
    assert not out.exists()


def test_help_lists_commands() -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "features" in result.output
    assert "dataset" in result.output


class TestFormatResult:
    def test_dict_result(self) -> None:
        text = format_result(
            {
                "success": True,
                "total": 1,
                "succeeded": 1,
                "failed": 0,
                "skipped": 0,
                "message": "done",
                "items": [
                    {
                        "file": "a.wav",
                        "status": "success",
                        "output": "a_mfcc_simple.npy",
                        "preset": "simple",
                        "sample_rate_hz": 16000,
                        "duration_sec": 0.5,
                        "feature_dim": 13,
                    }
                ],
                "failures": [],
            },
            operation="features",
        )
        assert text.splitlines()[0] == "✓ features"
        assert "total: 1 | succeeded: 1 | failed: 0 | skipped: 0" in text
        assert "a.wav: success -> a_mfcc_simple.npy" in text
        assert "preset: simple | audio: 0.500s @ 16000 Hz | features: 13-D" in text

    def test_failed_dict(self) -> None:
        text = format_result(
            {"success": False, "failures": [{"item": "x.wav", "reason": "File not found"}]},
            operation="features",
        )
        assert text.startswith("✗ features")
        assert "x.wav: File not found" in text

    def test_scalars(self) -> None:
        assert format_result(None, operation="op") == "✓ op"
        assert format_result(False, operation="op") == "✗ op"
        assert format_result("hi", operation="op") == "op: hi"


class TestHandleCliOperation:
    def test_prints_pre_message_then_result(self, capsys: pytest.CaptureFixture[str]) -> None:
        payload = {"success": True, "total": 0, "succeeded": 0, "failed": 0, "skipped": 0, "message": "done"}

        result = BaseCLI("features").handle_cli_operation(
            operation="features",
            op_callable=lambda: payload,
            pre_message="Starting...",
            enable_log=False,
        )

        assert result is payload
        assert capsys.readouterr().out.splitlines() == [
            "Starting...",
            "✓ features",
            "  total: 0 | succeeded: 0 | failed: 0 | skipped: 0",
            "  ℹ done",
        ]

    def test_unsuccessful_result_exits_nonzero(self) -> None:
        with pytest.raises(typer.Exit) as excinfo:
            BaseCLI("dataset").handle_cli_operation(
                operation="dataset",
                op_callable=lambda: {"success": False, "message": "nothing written"},
                enable_log=False,
            )
        assert excinfo.value.exit_code == 1
