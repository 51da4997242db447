"""Transcript reconciliation for OSCAR."""

from .merge import merge_transcripts
from .publisher import TranscriptPublisher, UPDATE_TOPIC, STOP_TOPIC
from .reconciler import TranscriptReconciler

__all__ = [
    "merge_transcripts",
    "TranscriptPublisher",
    "TranscriptReconciler",
    "UPDATE_TOPIC",
    "STOP_TOPIC",
]
