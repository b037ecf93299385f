"""CLI command for building a labeled training dataset from class folders."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ...pipeline.dataset import DEFAULT_PRESET, run_dataset
from ..base import BaseCLI

app = typer.Typer(
    name="dataset",
    help="Build a labeled MFCC dataset (.npz) from per-class audio folders",
)


@app.callback(invoke_without_command=True)
def dataset(
    class_dirs: Annotated[
        list[Path],
        typer.Argument(
            help="One folder of .wav files per class, in label order (index 0 first).",
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output .npz path. Default: data/derived/datasets/..."),
    ] = None,
    preset: Annotated[
        str,
        typer.Option("--preset", "-p", help="Feature preset: simple (13-D) or enhanced (60-D)."),
    ] = DEFAULT_PRESET,
    require_frames: Annotated[
        bool,
        typer.Option("--require-frames", help="Leave out recordings shorter than one analysis frame."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Extract features without writing the dataset."),
    ] = False,
    no_log: Annotated[
        bool,
        typer.Option("--no-log", help="Do not write a log file to data/logs/derived."),
    ] = False,
) -> None:
    """Build a training dataset: one feature row and one-hot label per recording."""
    cli = BaseCLI("dataset")

    def _run() -> dict:
        return run_dataset(
            class_dirs=list(class_dirs),
            output_path=output,
            preset=preset.lower(),
            require_frames=require_frames,
            dry_run=dry_run,
        )

    cli.handle_cli_operation(
        operation="dataset",
        op_callable=_run,
        pre_message=f"Building {preset} dataset from {len(class_dirs)} class folder(s)..."
        + (" (dry-run)" if dry_run else ""),
        log_module="dataset",
        log_method=preset.lower(),
        log_dry_run=dry_run,
        enable_log=not no_log,
        log_context={
            "classes": str([p.name for p in class_dirs]),
            "output": str(output) if output else "default",
        },
    )
