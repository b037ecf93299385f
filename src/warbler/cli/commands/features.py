"""CLI command for MFCC feature-vector extraction."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ...global_config import RAW_AUDIO_DIR
from ...pipeline.features import DEFAULT_PRESET, FEATURES_OUTPUT_DIR, run_features
from ..base import BaseCLI

app = typer.Typer(
    name="features",
    help="Extract MFCC feature vectors from raw audio and write .npy to data/derived/features",
)


@app.callback(invoke_without_command=True)
def features(
    files: Annotated[
        list[Path],
        typer.Argument(
            help="Audio file(s) to process. If omitted, all .wav files in data/raw/audio are used.",
        ),
    ] = [],
    preset: Annotated[
        str,
        typer.Option("--preset", "-p", help="Feature preset: simple (13-D) or enhanced (60-D)."),
    ] = DEFAULT_PRESET,
    output_dir: Annotated[
        Path,
        typer.Option("--output-dir", "-o", help="Directory for .npy outputs."),
    ] = FEATURES_OUTPUT_DIR,
    expected_dim: Annotated[
        int | None,
        typer.Option("--expected-dim", help="Fail files whose vector width differs (classifier input size)."),
    ] = None,
    require_frames: Annotated[
        bool,
        typer.Option("--require-frames", help="Skip recordings shorter than one analysis frame."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be written without writing files."),
    ] = False,
    no_log: Annotated[
        bool,
        typer.Option("--no-log", help="Do not write a log file to data/logs/derived."),
    ] = False,
) -> None:
    """Extract one MFCC feature vector per recording.

    Output filenames: <track-name>_mfcc_<preset>.npy
    """
    cli = BaseCLI("features")

    # Normalize: empty list of files means "use default folder"
    audio_list = list(files) if files else None

    def _run() -> dict:
        return run_features(
            audio_files=audio_list,
            output_dir=output_dir,
            raw_audio_dir=RAW_AUDIO_DIR,
            preset=preset.lower(),
            expected_dim=expected_dim,
            require_frames=require_frames,
            dry_run=dry_run,
        )

    pre_message = (
        "Extracting features (dry-run; no files will be written)..."
        if dry_run
        else f"Extracting {preset} features for "
        + (f"{len(audio_list)} file(s)..." if audio_list else "all audio in raw folder...")
    )
    inputs_desc = (
        str([str(p) for p in audio_list]) if audio_list
        else f"all .wav in {RAW_AUDIO_DIR}"
    )
    cli.handle_cli_operation(
        operation="features",
        op_callable=_run,
        pre_message=pre_message,
        log_module="features",
        log_method=preset.lower(),
        log_dry_run=dry_run,
        enable_log=not no_log,
        log_context={
            "inputs": inputs_desc,
            "output_dir": str(output_dir),
        },
    )
