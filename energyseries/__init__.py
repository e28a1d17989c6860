from . import (
    canon,
    exceptions,
    types,
    utils,
    validate,
    normalize,
    merge,
    backfill,
    ingest,
    config,
    formats,
)

__all__ = [
    "canon",
    "exceptions",
    "types",
    "utils",
    "validate",
    "normalize",
    "merge",
    "backfill",
    "ingest",
    "config",
    "formats",
]
