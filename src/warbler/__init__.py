"""
warbler core package.

This package provides:
- MFCC feature extraction for bird-call classification (`warbler.mfcc`)
- File-level pipelines that decode audio, write feature vectors and build
  labeled training datasets (`warbler.pipeline`)
- A Typer-based CLI (`warbler.cli`)

Configuration:
- Shared, project-wide filesystem anchors live in `warbler.global_config`.
- Feature-extraction presets live in `warbler.mfcc.config`.
"""
