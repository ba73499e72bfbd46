"""Data models for the user blueprint."""

from __future__ import annotations

from bucketlist.core.types import FirestoreDocument


class User(FirestoreDocument, total=False):
    """A user document in Firestore.

    ``bucketOrder`` always holds exactly four bucket ids; ``""`` is an unused slot.
    """

    email: str
    first: str
    last: str
    name: str
    bucketOrder: list[str]
    uid: str


def public_profile(user: User) -> dict[str, object]:
    """Return the fields of a user that are safe to send to clients."""
    return {
        "id": user.get("id") or user.get("uid"),
        "email": user.get("email", ""),
        "first": user.get("first", ""),
        "last": user.get("last", ""),
        "name": user.get("name", ""),
        "bucketOrder": list(user.get("bucketOrder", [])),
    }
