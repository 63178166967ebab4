"""
Pipeline package -- loading the dashboard dataset.

Re-exports key entry points so callers can do::

    from pipeline import load_dataset, DatasetError
"""

from pipeline.loader import Dataset, DatasetError, load_dataset, parse_dataset

__all__ = [
    "Dataset",
    "DatasetError",
    "load_dataset",
    "parse_dataset",
]
