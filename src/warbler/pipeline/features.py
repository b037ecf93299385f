"""Pipeline for extracting MFCC feature vectors from raw audio and writing .npy outputs."""

from __future__ import annotations

import logging
from pathlib import Path

import librosa
import numpy as np

from ..global_config import FEATURES_DIR, RAW_AUDIO_DIR
from ..mfcc import (
    FeatureDimensionMismatch,
    InsufficientAudio,
    ensure_feature_dim,
    extract_features,
    get_config,
)
from ..mfcc.config import PRESET_NAMES

logger = logging.getLogger(__name__)

FEATURES_OUTPUT_DIR = FEATURES_DIR
DEFAULT_PRESET = "enhanced"


def _resolve_audio_files(files: list[Path] | None, raw_audio_dir: Path) -> list[Path]:
    """Return list of audio paths: explicit files if given, else all .wav in raw_audio_dir."""
    if files:
        return [Path(p).resolve() for p in files]
    if not raw_audio_dir.exists():
        return []
    return sorted(raw_audio_dir.glob("*.wav"))


def _track_name(audio_path: Path) -> str:
    """Stem of the audio file (no extension)."""
    return audio_path.stem


def _output_filename(track_name: str, preset: str) -> str:
    """Build filename: <track-name>_mfcc_<preset>.npy."""
    return f"{track_name}_mfcc_{preset}.npy"


def load_waveform(audio_path: Path) -> tuple[np.ndarray, int]:
    """Decode an audio file to mono float samples at its native sample rate."""
    y, sr = librosa.load(audio_path, sr=None, mono=True)
    return y, int(sr)


def _empty_result(success: bool, message: str) -> dict:
    return {
        "success": success,
        "total": 0,
        "succeeded": 0,
        "failed": 0,
        "skipped": 0,
        "message": message,
        "items": [],
        "failures": [],
    }


def run_features(
    *,
    audio_files: list[Path] | None = None,
    output_dir: Path = FEATURES_OUTPUT_DIR,
    raw_audio_dir: Path = RAW_AUDIO_DIR,
    preset: str = DEFAULT_PRESET,
    expected_dim: int | None = None,
    require_frames: bool = False,
    dry_run: bool = False,
) -> dict:
    """Extract a feature vector for each audio file and write .npy to output_dir.

    If audio_files is None or empty, uses all .wav files in raw_audio_dir.
    Output filename: <track-name>_mfcc_<preset>.npy (float64, one row).

    When ``expected_dim`` is set, a vector of a different width is reported as a
    failure. When ``require_frames`` is set, recordings shorter than one
    analysis frame are skipped instead of producing a zero vector.

    Returns:
        Dict with success, total, succeeded, failed, skipped, message, items, failures.
    """
    preset = preset.lower()
    if preset not in PRESET_NAMES:
        return _empty_result(
            False, f"Unknown preset: {preset}. Use one of: {sorted(PRESET_NAMES)}"
        )
    config = get_config(preset)

    paths = _resolve_audio_files(audio_files, raw_audio_dir)
    if not paths:
        return _empty_result(True, "No audio files to process.")

    output_dir = Path(output_dir)
    if not dry_run:
        output_dir.mkdir(parents=True, exist_ok=True)

    succeeded = 0
    failed = 0
    skipped = 0
    items: list[dict] = []
    failures: list[dict] = []

    for audio_path in paths:
        track_name = _track_name(audio_path)
        out_name = _output_filename(track_name, preset)
        out_path = output_dir / out_name

        if not audio_path.exists():
            failed += 1
            failures.append({"item": str(audio_path), "reason": "File not found"})
            items.append({"file": str(audio_path), "status": "failed", "detail": "File not found"})
            continue

        try:
            y, sr = load_waveform(audio_path)
            vector = extract_features(y, sr, config, strict=require_frames)
            if expected_dim is not None:
                ensure_feature_dim(vector, expected_dim)
            if not dry_run:
                np.save(out_path, vector, allow_pickle=False)
            succeeded += 1
            items.append({
                "file": audio_path.name,
                "output": out_name,
                "status": "success",
                "preset": preset,
                "sample_rate_hz": sr,
                "duration_sec": len(y) / sr if sr else 0.0,
                "feature_dim": int(vector.shape[0]),
            })
        except InsufficientAudio as e:
            skipped += 1
            logger.info("Skipping %s: %s", audio_path.name, e)
            items.append({
                "file": audio_path.name,
                "status": "skipped",
                "detail": "recording too short",
            })
        except FeatureDimensionMismatch as e:
            failed += 1
            failures.append({"item": str(audio_path), "reason": str(e)})
            items.append({"file": audio_path.name, "status": "failed", "detail": str(e)})
        except Exception as e:
            logger.exception("Feature extraction failed for %s", audio_path)
            failed += 1
            failures.append({"item": str(audio_path), "reason": str(e)})
            items.append({"file": audio_path.name, "status": "failed", "detail": str(e)})

    return {
        "success": failed == 0,
        "total": len(paths),
        "succeeded": succeeded,
        "failed": failed,
        "skipped": skipped,
        "message": f"Processed {len(paths)} file(s). Succeeded: {succeeded}, "
        f"failed: {failed}, skipped: {skipped}."
        + (" [DRY RUN]" if dry_run else ""),
        "items": items,
        "failures": failures,
    }
