"""Pipeline orchestration layer.

Pipeline modules decode audio files, call into `warbler.mfcc`, and write
derived arrays under data/derived:
- `pipeline/features.py` - one feature vector per recording (.npy)
- `pipeline/dataset.py` - labeled training dataset from class folders (.npz)

Import policy:
- CLI imports only from `pipeline.*` for orchestration.
- `pipeline.*` may call `mfcc.*`.
- `mfcc.*` must not call `pipeline.*` and performs no I/O.
"""
