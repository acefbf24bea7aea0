"""Match analytics engine for League of Legends players."""

__all__ = [
    "tables",
    "extract",
    "aggregate",
    "playstyle",
    "benchmarks",
    "compatibility",
    "ranks",
    "config",
    "riot_client",
    "riot_ingest",
    "report",
    "render",
]
