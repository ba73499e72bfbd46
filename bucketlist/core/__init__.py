"""Core module for the bucketlist application."""

from .types import FirestoreDocument

__all__ = ["FirestoreDocument"]
