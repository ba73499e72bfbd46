"""Issuing and resolving bucket invite codes."""

from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore

from bucketlist.bucket.services import BucketService
from bucketlist.constants import (
    BUCKET_INVITE_CODE,
    BUCKET_INVITE_EXPIRY,
    BUCKETS_COLLECTION,
    INVITE_CODE_BYTES,
    INVITE_TTL_DAYS,
    JOIN_BUCKET_PATH,
)
from bucketlist.errors import Forbidden, InvalidOrExpiredInvite
from bucketlist.utils import as_utc, utcnow

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client

    from bucketlist.bucket.models import Bucket


class InviteService:
    """Each bucket carries at most one active invite; a new one replaces the old."""

    @staticmethod
    def generate_invite(
        db: Client,
        bucket_id: str,
        user_email: str,
        ttl_days: int = INVITE_TTL_DAYS,
        now: datetime | None = None,
    ) -> dict[str, Any]:
        """Issue a fresh invite code for a bucket the caller owns."""
        bucket = BucketService.require_bucket(db, bucket_id)
        if not BucketService.is_owner(bucket, user_email):
            raise Forbidden("Only the owner can generate invites.")

        invite_code = secrets.token_hex(INVITE_CODE_BYTES)
        invite_expiry = (now or utcnow()) + timedelta(days=ttl_days)
        db.collection(BUCKETS_COLLECTION).document(bucket_id).update(
            {BUCKET_INVITE_CODE: invite_code, BUCKET_INVITE_EXPIRY: invite_expiry}
        )
        logging.info(f"Generated invite for bucket {bucket_id}, expires {invite_expiry}")
        return {
            "bucketId": bucket_id,
            "bucketTitle": bucket.get("bucketTitle") or "",
            "inviteCode": invite_code,
            "inviteExpiry": invite_expiry,
        }

    @staticmethod
    def build_invite_url(base_url: str, invite_code: str) -> str:
        return f"{base_url.rstrip('/')}{JOIN_BUCKET_PATH}/{invite_code}"

    @staticmethod
    def resolve_invite(
        db: Client, invite_code: str, now: datetime | None = None
    ) -> Bucket | None:
        """Return the bucket whose invite matches and has not yet expired.

        An invite expiring exactly at ``now`` is already expired.
        """
        if not invite_code or not isinstance(invite_code, str):
            return None

        now = as_utc(now) or utcnow()
        query = (
            db.collection(BUCKETS_COLLECTION)
            .where(filter=firestore.FieldFilter(BUCKET_INVITE_CODE, "==", invite_code))
            .limit(1)
        )
        for doc in query.stream():
            data = doc.to_dict()
            if data is None:
                continue
            expiry = as_utc(data.get(BUCKET_INVITE_EXPIRY))
            if expiry is not None and expiry > now:
                data["id"] = doc.id
                return cast("Bucket", data)
        return None

    @staticmethod
    def require_invite(
        db: Client, invite_code: str, now: datetime | None = None
    ) -> Bucket:
        bucket = InviteService.resolve_invite(db, invite_code, now=now)
        if bucket is None:
            logging.warning("Rejected an unknown or expired invite code.")
            raise InvalidOrExpiredInvite()
        return bucket
