"""Utility modules."""

from zumu_translator.utils.observable import ObservableValue, ReadOnlyObservable

__all__ = [
    "ObservableValue",
    "ReadOnlyObservable",
]
