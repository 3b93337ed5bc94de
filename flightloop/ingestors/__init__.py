"""Data ingestors for flightloop."""

from .dataset import (
    DatasetError,
    DatasetLoader,
    EmptyDatasetError,
    LoadError,
    MalformedRecordError,
    build_dataset,
    parse_state_vector,
)

__all__ = [
    "DatasetError",
    "DatasetLoader",
    "EmptyDatasetError",
    "LoadError",
    "MalformedRecordError",
    "build_dataset",
    "parse_state_vector",
]
