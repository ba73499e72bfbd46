"""Data models for the bucket blueprint."""

from __future__ import annotations

from datetime import datetime
from typing import TypedDict

from bucketlist.core.types import FirestoreDocument


class Bucket(FirestoreDocument, total=False):
    """A bucket document in Firestore.

    ``ownerEmail`` is always an element of ``collaborators``.
    """

    bucketId: str
    bucketTitle: str
    ownerEmail: str
    collaborators: list[str]
    inviteCode: str | None
    inviteExpiry: datetime | None


class SlotSummary(TypedDict, total=False):
    """One of a user's slots as shown when choosing where a shared bucket goes."""

    index: int
    title: str
    isEmpty: bool
    isOwner: bool
