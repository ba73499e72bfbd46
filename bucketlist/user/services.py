"""Service layer for user records and their bucket slots."""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, cast

from firebase_admin import firestore

from bucketlist.bucket.services import BucketService
from bucketlist.constants import (
    BUCKET_ID_PREFIX,
    EMPTY_SLOT,
    SLOT_COUNT,
    USER_BUCKET_ORDER,
    USER_EMAIL,
    USERS_COLLECTION,
)
from bucketlist.errors import DuplicateResourceError, UserNotFound, ValidationError
from bucketlist.utils import normalize_email

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client

    from .models import User


def display_name(first: str | None, last: str | None) -> str:
    """Join first and last names into a display name."""
    return f"{first or ''} {last or ''}".strip()


def new_bucket_id() -> str:
    return f"{BUCKET_ID_PREFIX}{uuid.uuid4()}"


def is_empty_slot(bucket_id: str | None) -> bool:
    return not bucket_id or bucket_id.strip() == EMPTY_SLOT


class UserService:
    """Service class for user-related operations."""

    @staticmethod
    def get_user_by_id(db: Client, user_id: str) -> User | None:
        """Fetch a user by their ID."""
        user_doc = cast(
            "DocumentSnapshot", db.collection(USERS_COLLECTION).document(user_id).get()
        )
        if not user_doc.exists:
            return None
        data = user_doc.to_dict()
        if data is None:
            return None
        data["id"] = user_id
        return cast("User", data)

    @staticmethod
    def get_user_by_email(db: Client, email: str) -> User | None:
        """Fetch a user by email address, ignoring case."""
        email = normalize_email(email)
        if not email:
            return None
        query = (
            db.collection(USERS_COLLECTION)
            .where(filter=firestore.FieldFilter(USER_EMAIL, "==", email))
            .limit(1)
        )
        for doc in query.stream():
            data = doc.to_dict()
            if data is not None:
                data["id"] = doc.id
                return cast("User", data)
        return None

    @staticmethod
    def require_user_by_email(db: Client, email: str) -> User:
        user = UserService.get_user_by_email(db, email)
        if user is None:
            raise UserNotFound()
        return user

    @staticmethod
    def normalize_bucket_order(order: list[str] | None) -> list[str]:
        """Pad a slot list to exactly SLOT_COUNT entries.

        Raises:
            ValidationError: If the list holds more than SLOT_COUNT entries.
        """
        slots = [slot if isinstance(slot, str) else EMPTY_SLOT for slot in order or []]
        if len(slots) > SLOT_COUNT:
            raise ValidationError(f"bucketOrder must contain exactly {SLOT_COUNT} bucketIds.")
        return slots + [EMPTY_SLOT] * (SLOT_COUNT - len(slots))

    @staticmethod
    def provision_slots(
        db: Client, user_id: str, email: str, order: list[str] | None = None
    ) -> list[str]:
        """Fill every empty slot with a new bucket owned by the user.

        A Bucket document is ensured for every slot, so calling this again for
        an already provisioned user writes nothing new.
        """
        slots = [
            new_bucket_id() if is_empty_slot(bucket_id) else bucket_id
            for bucket_id in UserService.normalize_bucket_order(order)
        ]
        db.collection(USERS_COLLECTION).document(user_id).update(
            {USER_BUCKET_ORDER: slots}
        )
        for bucket_id in slots:
            BucketService.ensure_bucket(db, bucket_id, email)
        return slots

    @staticmethod
    def create_user(
        db: Client, user_id: str, email: str, first: str, last: str
    ) -> User:
        """Create the user document and its four owned buckets."""
        email = normalize_email(email)
        if UserService.get_user_by_email(db, email) is not None:
            raise DuplicateResourceError("User already exists.")

        user_data = {
            "email": email,
            "first": first,
            "last": last,
            "name": display_name(first, last),
            USER_BUCKET_ORDER: [EMPTY_SLOT] * SLOT_COUNT,
            "createdAt": firestore.SERVER_TIMESTAMP,
        }
        db.collection(USERS_COLLECTION).document(user_id).set(user_data)
        user_data[USER_BUCKET_ORDER] = UserService.provision_slots(db, user_id, email)
        user_data["id"] = user_id
        logging.info(f"Created user {user_id} with buckets {user_data[USER_BUCKET_ORDER]}")
        return cast("User", user_data)

    @staticmethod
    def find_slot(order: list[str], bucket_id: str) -> int | None:
        """Return the 0-based slot holding bucket_id, or None."""
        for index, slot in enumerate(order or []):
            if slot and slot == bucket_id:
                return index
        return None

    @staticmethod
    def assign_slot(db: Client, user_id: str, slot_index: int, bucket_id: str) -> str:
        """Point one slot at a bucket and return the id it held before."""
        user = UserService.get_user_by_id(db, user_id)
        if user is None:
            raise UserNotFound()
        slots = UserService.normalize_bucket_order(user.get(USER_BUCKET_ORDER))
        old_bucket_id = slots[slot_index]
        slots[slot_index] = bucket_id
        db.collection(USERS_COLLECTION).document(user_id).update(
            {USER_BUCKET_ORDER: slots}
        )
        return old_bucket_id

    @staticmethod
    def clear_slots_for_bucket(db: Client, user: User, bucket_id: str) -> list[int]:
        """Empty every slot of a user that references bucket_id."""
        slots = UserService.normalize_bucket_order(user.get(USER_BUCKET_ORDER))
        cleared = [index for index, slot in enumerate(slots) if slot == bucket_id]
        if not cleared:
            return []
        for index in cleared:
            slots[index] = EMPTY_SLOT
        db.collection(USERS_COLLECTION).document(user["id"]).update(
            {USER_BUCKET_ORDER: slots}
        )
        return cleared
