"""Service layer for bucket records and per-user title aggregation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore

from bucketlist.constants import (
    BUCKET_COLLABORATORS,
    BUCKET_ID,
    BUCKET_INVITE_CODE,
    BUCKET_INVITE_EXPIRY,
    BUCKET_OWNER_EMAIL,
    BUCKET_TITLE,
    BUCKETS_COLLECTION,
    EMPTY_SLOT,
    USER_BUCKET_ORDER,
)
from bucketlist.errors import BucketNotFound, Forbidden, UserNotFound
from bucketlist.utils import normalize_email

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client

    from .models import Bucket


def ensure_owner_membership(collaborators: list[str], owner_email: str) -> list[str]:
    """Return the collaborator list with the owner present exactly once."""
    members: list[str] = []
    for email in collaborators or []:
        if email and email not in members:
            members.append(email)
    if owner_email and owner_email not in members:
        members.append(owner_email)
    return members


class BucketService:
    """Service class for bucket-related operations."""

    @staticmethod
    def get_bucket(db: Client, bucket_id: str) -> Bucket | None:
        """Fetch a bucket by its identifier."""
        if not bucket_id:
            return None
        doc = cast("DocumentSnapshot", db.collection(BUCKETS_COLLECTION).document(bucket_id).get())
        if not doc.exists:
            return None
        data = doc.to_dict()
        if data is None:
            return None
        data["id"] = doc.id
        return cast("Bucket", data)

    @staticmethod
    def require_bucket(db: Client, bucket_id: str) -> Bucket:
        """Fetch a bucket or raise BucketNotFound."""
        bucket = BucketService.get_bucket(db, bucket_id)
        if bucket is None:
            raise BucketNotFound()
        return bucket

    @staticmethod
    def ensure_bucket(db: Client, bucket_id: str, owner_email: str) -> bool:
        """Create the bucket for a freshly provisioned slot unless it already exists.

        Returns True if a new document was written.
        """
        bucket_ref = db.collection(BUCKETS_COLLECTION).document(bucket_id)
        if bucket_ref.get().exists:
            return False

        owner_email = normalize_email(owner_email)
        bucket_ref.set(
            {
                BUCKET_ID: bucket_id,
                BUCKET_TITLE: "",
                BUCKET_OWNER_EMAIL: owner_email,
                BUCKET_COLLABORATORS: ensure_owner_membership([], owner_email),
                BUCKET_INVITE_CODE: None,
                BUCKET_INVITE_EXPIRY: None,
                "createdAt": firestore.SERVER_TIMESTAMP,
            }
        )
        return True

    @staticmethod
    def is_collaborator(bucket: Bucket | dict[str, Any], email: str) -> bool:
        return normalize_email(email) in (bucket.get(BUCKET_COLLABORATORS) or [])

    @staticmethod
    def is_owner(bucket: Bucket | dict[str, Any], email: str) -> bool:
        return bucket.get(BUCKET_OWNER_EMAIL) == normalize_email(email)

    @staticmethod
    def get_bucket_title(db: Client, bucket_id: str) -> str:
        """Return a bucket's title, or an empty string if unset or missing."""
        bucket = BucketService.get_bucket(db, bucket_id)
        if bucket is None:
            return ""
        return bucket.get(BUCKET_TITLE) or ""

    @staticmethod
    def update_bucket_title(db: Client, bucket_id: str, title: str, email: str) -> str:
        """Rename a bucket. Every collaborator has write access to the title."""
        bucket = BucketService.require_bucket(db, bucket_id)
        if not BucketService.is_collaborator(bucket, email):
            raise Forbidden("You are not a collaborator on this bucket.")

        title = (title or "").strip()
        db.collection(BUCKETS_COLLECTION).document(bucket_id).update(
            {BUCKET_TITLE: title}
        )
        return title

    @staticmethod
    def get_ordered_bucket_titles(db: Client, email: str) -> list[str]:
        """Return the titles of a user's buckets in that user's slot order."""
        # Imported here to avoid a circular import with the user services.
        from bucketlist.user.services import UserService

        user = UserService.get_user_by_email(db, email)
        if user is None:
            raise UserNotFound()

        titles = []
        for bucket_id in user.get(USER_BUCKET_ORDER, []):
            if not bucket_id or bucket_id.strip() == EMPTY_SLOT:
                titles.append("")
                continue
            bucket = BucketService.get_bucket(db, bucket_id)
            if bucket is None:
                logging.warning(
                    f"User {user['id']} has a slot pointing at missing bucket {bucket_id}."
                )
                titles.append("")
                continue
            titles.append(bucket.get(BUCKET_TITLE) or "")
        return titles
