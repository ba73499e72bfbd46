"""Placing a shared bucket into one of the invitee's slots."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any

from firebase_admin import firestore

from bucketlist.bucket.services import BucketService
from bucketlist.constants import (
    BUCKET_COLLABORATORS,
    BUCKET_OWNER_EMAIL,
    BUCKET_TITLE,
    BUCKETS_COLLECTION,
    SLOT_COUNT,
    USER_BUCKET_ORDER,
)
from bucketlist.errors import InvalidSlotIndex
from bucketlist.user.services import UserService, is_empty_slot
from bucketlist.utils import normalize_email

from .invites import InviteService

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client

    from bucketlist.bucket.models import SlotSummary
    from bucketlist.user.models import User


class SlotService:
    """Decides which of a user's four slots hosts a shared bucket."""

    @staticmethod
    def describe_slots(db: Client, user: User) -> list[SlotSummary]:
        """Summarize the user's slots without changing anything."""
        email = normalize_email(user.get("email"))
        slots = UserService.normalize_bucket_order(user.get(USER_BUCKET_ORDER))
        summaries: list[SlotSummary] = []
        for index, bucket_id in enumerate(slots):
            if is_empty_slot(bucket_id):
                summaries.append(
                    {"index": index, "title": f"Empty Slot {index + 1}", "isEmpty": True}
                )
                continue
            bucket = BucketService.get_bucket(db, bucket_id) or {}
            summaries.append(
                {
                    "index": index,
                    "title": bucket.get(BUCKET_TITLE) or f"Bucket {index + 1}",
                    "isEmpty": False,
                    "isOwner": bucket.get(BUCKET_OWNER_EMAIL) == email,
                }
            )
        return summaries

    @staticmethod
    def validate_slot_index(slot_index: Any) -> int:
        """Accept only an integer (not a bool) between 0 and SLOT_COUNT - 1."""
        if (
            isinstance(slot_index, bool)
            or not isinstance(slot_index, int)
            or not 0 <= slot_index < SLOT_COUNT
        ):
            raise InvalidSlotIndex()
        return slot_index

    @staticmethod
    def accept_invite(
        db: Client,
        user_email: str,
        invite_code: str,
        slot_index: Any = None,
        now: datetime | None = None,
    ) -> dict[str, Any]:
        """Join the bucket behind an invite code.

        Without a slot index nothing is written and the caller receives the
        summaries of their current slots to choose from.
        """
        user = UserService.require_user_by_email(db, user_email)
        email = normalize_email(user.get("email"))
        bucket = InviteService.require_invite(db, invite_code, now=now)
        bucket_id = bucket["id"]
        payload = {
            "bucketId": bucket_id,
            "bucketTitle": bucket.get(BUCKET_TITLE) or "",
            "owner": bucket.get(BUCKET_OWNER_EMAIL),
        }

        if BucketService.is_collaborator(bucket, email):
            existing = UserService.find_slot(user.get(USER_BUCKET_ORDER, []), bucket_id)
            return {
                "success": True,
                "message": "You're already a collaborator on this bucket",
                **payload,
                "slotIndex": existing + 1 if existing is not None else None,
                "alreadyCollaborator": True,
            }

        if slot_index is None:
            return {
                "success": False,
                "requiresSelection": True,
                "message": "Please choose which bucket slot to use",
                **payload,
                "currentBuckets": SlotService.describe_slots(db, user),
            }

        slot_index = SlotService.validate_slot_index(slot_index)

        db.collection(BUCKETS_COLLECTION).document(bucket_id).update(
            {BUCKET_COLLABORATORS: firestore.ArrayUnion([email])}
        )
        old_bucket_id = UserService.assign_slot(db, user["id"], slot_index, bucket_id)
        replaced = not is_empty_slot(old_bucket_id)
        if replaced and old_bucket_id != bucket_id:
            SlotService._release_replaced_bucket(db, old_bucket_id, email)

        logging.info(f"User {user['id']} joined bucket {bucket_id} in slot {slot_index}")
        return {
            "success": True,
            "message": "Successfully joined bucket",
            **payload,
            "slotIndex": slot_index + 1,
            "replaced": replaced,
        }

    @staticmethod
    def _release_replaced_bucket(db: Client, old_bucket_id: str, email: str) -> None:
        """Drop the user from a bucket they only visited as a guest.

        Runs after the join has been committed, so failures are logged rather
        than raised.
        """
        try:
            old_bucket = BucketService.get_bucket(db, old_bucket_id)
            if old_bucket is None:
                return
            if old_bucket.get(BUCKET_OWNER_EMAIL) == email:
                logging.info(
                    f"Bucket {old_bucket_id} is no longer in any slot of its owner {email}."
                )
                return
            db.collection(BUCKETS_COLLECTION).document(old_bucket_id).update(
                {BUCKET_COLLABORATORS: firestore.ArrayRemove([email])}
            )
        except Exception as e:
            logging.error(f"Failed to release replaced bucket {old_bucket_id}: {e}")
