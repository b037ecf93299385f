"""Pipeline for building a labeled MFCC training dataset from per-class audio folders.

Each class is a directory of .wav recordings; its index is its position in the
list of class directories and its name is the directory name. The dataset is
one feature vector per recording plus a one-hot label row.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from ..global_config import DATASETS_DIR
from ..mfcc import InsufficientAudio, extract_features, get_config
from ..mfcc.config import PRESET_NAMES
from .features import load_waveform

logger = logging.getLogger(__name__)

DATASET_OUTPUT_DIR = DATASETS_DIR
DEFAULT_PRESET = "simple"
CLASS_DIR_NOT_FOUND = "Class directory not found"


@dataclass(frozen=True)
class Dataset:
    features: np.ndarray  # [n, D]
    labels: np.ndarray  # [n, C] one-hot
    class_names: np.ndarray  # [C] str
    files: np.ndarray  # [n] str

    @property
    def num_classes(self) -> int:
        return int(self.class_names.shape[0])

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        np.savez_compressed(
            path,
            features=self.features,
            labels=self.labels,
            class_names=self.class_names,
            files=self.files,
        )

    @staticmethod
    def load(path: Path) -> "Dataset":
        with np.load(path, allow_pickle=False) as z:
            return Dataset(
                features=z["features"].astype(np.float64),
                labels=z["labels"].astype(np.float64),
                class_names=z["class_names"].astype(str),
                files=z["files"].astype(str),
            )


def one_hot(index: int, num_classes: int) -> np.ndarray:
    """One-hot row of length num_classes with a 1 at index."""
    if not 0 <= index < num_classes:
        raise ValueError(f"Label index {index} out of range for {num_classes} classes")
    row = np.zeros(num_classes, dtype=np.float64)
    row[index] = 1.0
    return row


def _output_filename(preset: str, num_classes: int) -> str:
    """Build filename: dataset_mfcc_<preset>_<num_classes>-classes.npz."""
    return f"dataset_mfcc_{preset}_{num_classes}-classes.npz"


def _class_audio_files(class_dir: Path) -> list[Path]:
    return sorted(class_dir.glob("*.wav"))


def build_dataset(
    class_dirs: list[Path],
    preset: str = DEFAULT_PRESET,
    *,
    require_frames: bool = False,
) -> tuple[Dataset, list[dict], list[dict]]:
    """Extract one feature vector per recording in each class directory.

    Files that cannot be decoded, and class directories that do not exist,
    are left out and reported in ``failures``.
    With ``require_frames`` recordings shorter than one analysis frame are
    left out as skipped; otherwise they contribute a zero vector.

    Returns:
        (dataset, items, failures)
    """
    config = get_config(preset)
    class_dirs = [Path(d) for d in class_dirs]
    num_classes = len(class_dirs)

    rows: list[np.ndarray] = []
    labels: list[np.ndarray] = []
    files: list[str] = []
    items: list[dict] = []
    failures: list[dict] = []

    for label_index, class_dir in enumerate(class_dirs):
        if not class_dir.is_dir():
            logger.error("Class directory not found: %s", class_dir)
            failures.append({"item": str(class_dir), "reason": CLASS_DIR_NOT_FOUND})
            items.append({
                "file": str(class_dir),
                "status": "failed",
                "detail": CLASS_DIR_NOT_FOUND,
                "label": class_dir.name,
            })
            continue
        audio_paths = _class_audio_files(class_dir)
        if not audio_paths:
            logger.warning("No .wav files for class %r in %s", class_dir.name, class_dir)
        for audio_path in audio_paths:
            try:
                y, sr = load_waveform(audio_path)
                vector = extract_features(y, sr, config, strict=require_frames)
            except InsufficientAudio:
                items.append({
                    "file": audio_path.name,
                    "status": "skipped",
                    "detail": "recording too short",
                    "label": class_dir.name,
                })
                continue
            except Exception as e:
                logger.exception("Feature extraction failed for %s", audio_path)
                failures.append({"item": str(audio_path), "reason": str(e)})
                items.append({"file": audio_path.name, "status": "failed", "detail": str(e)})
                continue
            rows.append(vector)
            labels.append(one_hot(label_index, num_classes))
            files.append(str(audio_path))
            items.append({"file": audio_path.name, "status": "success", "label": class_dir.name})

    features = (
        np.vstack(rows) if rows else np.zeros((0, config.feature_dim), dtype=np.float64)
    )
    label_matrix = (
        np.vstack(labels) if labels else np.zeros((0, num_classes), dtype=np.float64)
    )
    dataset = Dataset(
        features=features,
        labels=label_matrix,
        class_names=np.array([d.name for d in class_dirs], dtype=str),
        files=np.array(files, dtype=str),
    )
    return dataset, items, failures


def run_dataset(
    *,
    class_dirs: list[Path],
    output_path: Path | None = None,
    preset: str = DEFAULT_PRESET,
    require_frames: bool = False,
    dry_run: bool = False,
) -> dict:
    """Build a labeled dataset from class directories and write it as .npz.

    The archive holds ``features`` [n, D], one-hot ``labels`` [n, C],
    ``class_names`` [C] and source ``files`` [n]. Default output:
    data/derived/datasets/dataset_mfcc_<preset>_<C>-classes.npz.
    Nothing is written when a class directory is missing.

    Returns:
        Dict with success, total, succeeded, failed, skipped, message, items, failures.
    """
    preset = preset.lower()
    if preset not in PRESET_NAMES:
        return {
            "success": False,
            "total": 0,
            "succeeded": 0,
            "failed": 0,
            "skipped": 0,
            "message": f"Unknown preset: {preset}. Use one of: {sorted(PRESET_NAMES)}",
            "items": [],
            "failures": [],
        }
    if len(class_dirs) < 1:
        return {
            "success": False,
            "total": 0,
            "succeeded": 0,
            "failed": 0,
            "skipped": 0,
            "message": "At least one class directory is required.",
            "items": [],
            "failures": [],
        }

    dataset, items, failures = build_dataset(
        class_dirs, preset, require_frames=require_frames
    )
    if output_path is None:
        output_path = DATASET_OUTPUT_DIR / _output_filename(preset, dataset.num_classes)
    output_path = Path(output_path)

    succeeded = int(dataset.features.shape[0])
    skipped = sum(1 for item in items if item["status"] == "skipped")
    failed = len(failures)
    # a missing class would leave an all-zero label column
    missing_class = any(f["reason"] == CLASS_DIR_NOT_FOUND for f in failures)

    if succeeded and not missing_class and not dry_run:
        dataset.save(output_path)

    if missing_class:
        message = "Class directory not found; nothing written."
    elif succeeded:
        message = (
            f"{succeeded} sample(s) x {dataset.features.shape[1]} feature(s), "
            f"{dataset.num_classes} class(es) -> {output_path.name}"
        )
    else:
        message = "No samples extracted; nothing written."

    return {
        "success": failed == 0 and succeeded > 0,
        "total": len(items),
        "succeeded": succeeded,
        "failed": failed,
        "skipped": skipped,
        "message": message
        + (" [DRY RUN]" if dry_run else ""),
        "items": items,
        "failures": failures,
        "output": str(output_path),
        "shape": list(dataset.features.shape),
    }
