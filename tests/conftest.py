"""Common utilities for tests."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Optional
from unittest.mock import MagicMock, patch

from mockfirestore import CollectionReference, Query
from mockfirestore.document import DocumentReference

# Every module that touches firestore sentinels or firestore.client().
FIRESTORE_MODULES = [
    "bucketlist.firestore",
    "bucketlist.auth.routes.firestore",
    "bucketlist.bucket.routes.firestore",
    "bucketlist.bucket.services.firestore",
    "bucketlist.collab.routes.firestore",
    "bucketlist.collab.services.invites.firestore",
    "bucketlist.collab.services.roster.firestore",
    "bucketlist.collab.services.slots.firestore",
    "bucketlist.user.services.firestore",
]


class MockArrayUnion:
    def __init__(self, values: list[Any]) -> None:
        self.values = values

    def __iter__(self) -> Iterator[Any]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)


class MockArrayRemove:
    def __init__(self, values: list[Any]) -> None:
        self.values = values

    def __iter__(self) -> Iterator[Any]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)


class MockFieldFilter:
    def __init__(self, field_path: str, op_string: str, value: Any) -> None:
        self.field_path = field_path
        self.op_string = op_string
        self.value = value


def patch_mockfirestore() -> None:
    """Apply monkeypatches to mockfirestore to support FieldFilter and sentinels."""

    def collection_where(
        self: Any,
        field_path: Optional[str] = None,
        op_string: Optional[str] = None,
        value: Any = None,
        filter: Any = None,
    ) -> Any:
        if filter:
            return self._where(filter.field_path, filter.op_string, filter.value)
        return self._where(field_path, op_string, value)

    if not hasattr(CollectionReference, "_where"):
        CollectionReference._where = CollectionReference.where
        CollectionReference.where = collection_where

    def query_where(
        self: Any,
        field_path: Optional[str] = None,
        op_string: Optional[str] = None,
        value: Any = None,
        filter: Any = None,
    ) -> Any:
        if filter:
            return self._where(filter.field_path, filter.op_string, filter.value)
        return self._where(field_path, op_string, value)

    if not hasattr(Query, "_where"):
        Query._where = Query.where
        Query.where = query_where

    if not hasattr(DocumentReference, "_orig_update"):
        DocumentReference._orig_update = DocumentReference.update

        def patched_update(self: Any, data: dict[str, Any]) -> Any:
            current_data = self.get().to_dict() or {}
            new_data = {}
            for k, v in data.items():
                if isinstance(v, MockArrayUnion):
                    existing = current_data.get(k, [])
                    if not isinstance(existing, list):
                        existing = []
                    # Firestore performs a set union
                    merged = list(existing)
                    for item in v.values:
                        if item not in merged:
                            merged.append(item)
                    new_data[k] = merged
                elif isinstance(v, MockArrayRemove):
                    existing = current_data.get(k, [])
                    if not isinstance(existing, list):
                        existing = []
                    new_data[k] = [i for i in existing if i not in v.values]
                else:
                    new_data[k] = v
            return self._orig_update(new_data)

        DocumentReference.update = patched_update


def make_firestore_module(db: Any) -> MagicMock:
    """Build a stand-in for the firebase_admin.firestore module backed by db."""
    module = MagicMock()
    module.client.return_value = db
    module.FieldFilter = MockFieldFilter
    module.ArrayUnion = MockArrayUnion
    module.ArrayRemove = MockArrayRemove
    module.SERVER_TIMESTAMP = "2024-01-01"
    return module


def patch_firestore(test_case: Any, db: Any) -> MagicMock:
    """Route every firestore reference in the app to db for one test."""
    patch_mockfirestore()
    module = make_firestore_module(db)
    for target in FIRESTORE_MODULES:
        patcher = patch(target, new=module)
        patcher.start()
        test_case.addCleanup(patcher.stop)
    return module


def seed_user(
    db: Any,
    user_id: str,
    email: str,
    bucket_order: list[str],
    first: str = "Test",
    last: str = "User",
) -> None:
    """Write a user document without provisioning buckets."""
    db.collection("users").document(user_id).set(
        {
            "email": email,
            "first": first,
            "last": last,
            "name": f"{first} {last}",
            "bucketOrder": bucket_order,
        }
    )


def seed_bucket(
    db: Any,
    bucket_id: str,
    owner_email: str,
    title: str = "",
    collaborators: list[str] | None = None,
    invite_code: str | None = None,
    invite_expiry: Any = None,
) -> None:
    """Write a bucket document; the owner is always a collaborator."""
    members = list(collaborators or [])
    if owner_email not in members:
        members.insert(0, owner_email)
    db.collection("buckets").document(bucket_id).set(
        {
            "bucketId": bucket_id,
            "bucketTitle": title,
            "ownerEmail": owner_email,
            "collaborators": members,
            "inviteCode": invite_code,
            "inviteExpiry": invite_expiry,
        }
    )


def bucket_data(db: Any, bucket_id: str) -> dict[str, Any]:
    return db.collection("buckets").document(bucket_id).get().to_dict()


def user_data(db: Any, user_id: str) -> dict[str, Any]:
    return db.collection("users").document(user_id).get().to_dict()
