"""Reading and pruning a bucket's collaborator set."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from firebase_admin import firestore

from bucketlist.bucket.services import BucketService
from bucketlist.constants import (
    BUCKET_COLLABORATORS,
    BUCKET_OWNER_EMAIL,
    BUCKETS_COLLECTION,
    USER_EMAIL,
    USERS_COLLECTION,
)
from bucketlist.errors import CannotRemoveOwner, Forbidden
from bucketlist.user.services import UserService, display_name
from bucketlist.utils import normalize_email

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client

FIRESTORE_IN_LIMIT = 30


class RosterService:
    """Service class for a bucket's collaborators."""

    @staticmethod
    def list_collaborators(
        db: Client, bucket_id: str, user_email: str
    ) -> list[dict[str, Any]]:
        """Return the profile of every collaborator, flagging the owner."""
        bucket = BucketService.require_bucket(db, bucket_id)
        if not BucketService.is_collaborator(bucket, user_email):
            raise Forbidden("Access denied.")

        emails = list(bucket.get(BUCKET_COLLABORATORS, []))
        owner_email = bucket.get(BUCKET_OWNER_EMAIL)
        users_ref = db.collection(USERS_COLLECTION)
        profiles = {}
        for i in range(0, len(emails), FIRESTORE_IN_LIMIT):
            chunk = emails[i : i + FIRESTORE_IN_LIMIT]
            query = users_ref.where(filter=firestore.FieldFilter(USER_EMAIL, "in", chunk))
            for doc in query.stream():
                data = doc.to_dict() or {}
                profiles[data.get(USER_EMAIL)] = data

        collaborators = []
        for email in emails:
            data = profiles.get(email)
            if data is None:
                continue
            collaborators.append(
                {
                    "email": email,
                    "name": data.get("name")
                    or display_name(data.get("first"), data.get("last")),
                    "isOwner": email == owner_email,
                }
            )
        return collaborators

    @staticmethod
    def remove_collaborator(
        db: Client, bucket_id: str, collaborator_email: str, user_email: str
    ) -> None:
        """Remove a collaborator and clear the slot they had pointing here."""
        bucket = BucketService.require_bucket(db, bucket_id)
        if not BucketService.is_owner(bucket, user_email):
            raise Forbidden("Only the owner can remove collaborators.")

        collaborator_email = normalize_email(collaborator_email)
        if collaborator_email == bucket.get(BUCKET_OWNER_EMAIL):
            raise CannotRemoveOwner()

        db.collection(BUCKETS_COLLECTION).document(bucket_id).update(
            {BUCKET_COLLABORATORS: firestore.ArrayRemove([collaborator_email])}
        )

        collaborator = UserService.get_user_by_email(db, collaborator_email)
        if collaborator is not None:
            cleared = UserService.clear_slots_for_bucket(db, collaborator, bucket_id)
            if cleared:
                logging.info(
                    f"Cleared slots {cleared} of {collaborator['id']} after removal from {bucket_id}"
                )
        logging.info(f"Removed {collaborator_email} from bucket {bucket_id}")
