"""Tests for the feature-vector pipeline."""

from __future__ import annotations

import wave
from pathlib import Path

import numpy as np
import pytest

from warbler.pipeline.features import (
    _output_filename,
    _resolve_audio_files,
    _track_name,
    load_waveform,
    run_features,
)


def _write_wav(
    path: Path,
    sr: int = 22050,
    duration_sec: float = 0.5,
    freq_hz: float | None = 440.0,
) -> None:
    """Write a mono 16-bit WAV: a sine at freq_hz, or silence if None."""
    n = int(sr * duration_sec)
    if freq_hz is None:
        y = np.zeros(n)
    else:
        y = 0.5 * np.sin(2 * np.pi * freq_hz * np.arange(n) / sr)
    buf = (y * 32767).astype(np.int16)
    with wave.open(str(path), "wb") as w:
        w.setnchannels(1)
        w.setsampwidth(2)
        w.setframerate(sr)
        w.writeframes(buf.tobytes())


class TestFeaturesHelpers:
    """Unit tests for pipeline helpers."""

    def test_track_name_from_path(self) -> None:
        assert _track_name(Path("/foo/bar/robin-01.wav")) == "robin-01"

    def test_output_filename_format(self) -> None:
        assert _output_filename("robin-01", "enhanced") == "robin-01_mfcc_enhanced.npy"

    def test_resolve_audio_files_explicit(self, tmp_path: Path) -> None:
        a = tmp_path / "a.wav"
        a.touch()
        got = _resolve_audio_files([a], tmp_path)
        assert [p.name for p in got] == ["a.wav"]

    def test_resolve_audio_files_default_folder(self, tmp_path: Path) -> None:
        (tmp_path / "one.wav").touch()
        (tmp_path / "two.wav").touch()
        (tmp_path / "notes.txt").touch()
        got = _resolve_audio_files(None, tmp_path)
        assert [p.name for p in got] == ["one.wav", "two.wav"]

    def test_resolve_audio_files_nonexistent_folder(self, tmp_path: Path) -> None:
        assert _resolve_audio_files(None, tmp_path / "missing") == []

    def test_load_waveform_native_rate(self, tmp_path: Path) -> None:
        path = tmp_path / "a.wav"
        _write_wav(path, sr=16000, duration_sec=0.25)
        y, sr = load_waveform(path)
        assert sr == 16000
        assert y.ndim == 1
        assert len(y) == 4000
        assert np.max(np.abs(y)) <= 1.0


class TestRunFeatures:
    """Integration-style tests for run_features (use tmp paths)."""

    @pytest.mark.integration
    @pytest.mark.parametrize(("preset", "width"), [("simple", 13), ("enhanced", 60)])
    def test_writes_npy(self, tmp_path: Path, preset: str, width: int) -> None:
        wav_dir = tmp_path / "audio"
        wav_dir.mkdir()
        out_dir = tmp_path / "features"
        _write_wav(wav_dir / "TRACK01.wav")

        result = run_features(
            audio_files=[wav_dir / "TRACK01.wav"],
            output_dir=out_dir,
            raw_audio_dir=wav_dir,
            preset=preset,
        )

        assert result["success"] is True
        assert result["total"] == 1
        assert result["succeeded"] == 1
        out_file = out_dir / f"TRACK01_mfcc_{preset}.npy"
        assert out_file.exists()
        arr = np.load(out_file)
        assert arr.shape == (width,)
        assert arr.dtype == np.float64
        assert np.all(np.isfinite(arr))
        item = result["items"][0]
        assert item["feature_dim"] == width
        assert item["sample_rate_hz"] == 22050
        assert item["duration_sec"] == pytest.approx(0.5)

    @pytest.mark.integration
    def test_default_folder(self, tmp_path: Path) -> None:
        wav_dir = tmp_path / "audio"
        wav_dir.mkdir()
        _write_wav(wav_dir / "a.wav")
        _write_wav(wav_dir / "b.wav", freq_hz=880.0)

        result = run_features(output_dir=tmp_path / "out", raw_audio_dir=wav_dir, preset="simple")

        assert result["total"] == 2
        assert result["succeeded"] == 2
        assert (tmp_path / "out" / "a_mfcc_simple.npy").exists()
        assert (tmp_path / "out" / "b_mfcc_simple.npy").exists()

    @pytest.mark.integration
    def test_dry_run_writes_nothing(self, tmp_path: Path) -> None:
        wav_dir = tmp_path / "audio"
        wav_dir.mkdir()
        out_dir = tmp_path / "features"
        _write_wav(wav_dir / "TRACK02.wav")

        result = run_features(audio_files=[wav_dir / "TRACK02.wav"], output_dir=out_dir, dry_run=True)

        assert result["success"] is True
        assert result["succeeded"] == 1
        assert "[DRY RUN]" in result["message"]
        assert not out_dir.exists()

    @pytest.mark.integration
    def test_short_recording_writes_zero_vector(self, tmp_path: Path) -> None:
        _write_wav(tmp_path / "chirp.wav", sr=22050, duration_sec=0.01)

        result = run_features(
            audio_files=[tmp_path / "chirp.wav"], output_dir=tmp_path / "out", preset="simple"
        )

        assert result["succeeded"] == 1
        arr = np.load(tmp_path / "out" / "chirp_mfcc_simple.npy")
        assert np.all(arr == 0.0)

    @pytest.mark.integration
    def test_short_recording_skipped_when_frames_required(self, tmp_path: Path) -> None:
        _write_wav(tmp_path / "chirp.wav", sr=22050, duration_sec=0.01)

        result = run_features(
            audio_files=[tmp_path / "chirp.wav"],
            output_dir=tmp_path / "out",
            require_frames=True,
        )

        assert result["success"] is True
        assert result["skipped"] == 1
        assert result["succeeded"] == 0
        assert result["items"][0]["detail"] == "recording too short"
        assert not (tmp_path / "out" / "chirp_mfcc_enhanced.npy").exists()

    @pytest.mark.integration
    def test_expected_dim_mismatch_is_a_failure(self, tmp_path: Path) -> None:
        _write_wav(tmp_path / "a.wav")

        result = run_features(
            audio_files=[tmp_path / "a.wav"],
            output_dir=tmp_path / "out",
            preset="simple",
            expected_dim=60,
        )

        assert result["success"] is False
        assert result["failed"] == 1
        assert "Expected a 60-D feature vector, got 13-D" in result["failures"][0]["reason"]

    def test_missing_file_is_a_failure(self, tmp_path: Path) -> None:
        result = run_features(audio_files=[tmp_path / "nope.wav"], output_dir=tmp_path / "out")
        assert result["success"] is False
        assert result["failures"][0]["reason"] == "File not found"

    def test_undecodable_file_is_a_failure(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.wav"
        bad.write_bytes(b"not audio at all")
        result = run_features(audio_files=[bad], output_dir=tmp_path / "out")
        assert result["success"] is False
        assert result["failed"] == 1

    def test_unknown_preset_fails(self, tmp_path: Path) -> None:
        result = run_features(audio_files=[], output_dir=tmp_path, preset="fancy")
        assert result["success"] is False
        assert "Unknown preset" in result["message"]

    def test_no_files_returns_ok_empty_message(self, tmp_path: Path) -> None:
        result = run_features(audio_files=None, output_dir=tmp_path, raw_audio_dir=tmp_path)
        assert result["success"] is True
        assert result["total"] == 0
        assert "No audio files" in result["message"]
