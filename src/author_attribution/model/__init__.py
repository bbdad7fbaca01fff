"""Frequency model: training, classification and storage."""

from .frequency import FrequencyCounter, FrequencyModel
from .trainer import train
from .classifier import (
    Classification,
    Classifier,
    Predication,
    SentenceScores,
    classify,
)
from .persistence import dumps, load, loads, save

__all__ = [
    # Model
    "FrequencyCounter",
    "FrequencyModel",
    # Training
    "train",
    # Classification
    "Classification",
    "Classifier",
    "Predication",
    "SentenceScores",
    "classify",
    # Storage
    "dumps",
    "load",
    "loads",
    "save",
]
