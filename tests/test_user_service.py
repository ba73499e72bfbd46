"""Tests for UserService."""

from __future__ import annotations

import unittest

from mockfirestore import MockFirestore

from bucketlist.errors import DuplicateResourceError, ValidationError
from bucketlist.user.services import UserService
from tests.conftest import bucket_data, patch_firestore, seed_user, user_data


class TestUserService(unittest.TestCase):
    def setUp(self) -> None:
        self.db = MockFirestore()
        patch_firestore(self, self.db)

    def test_normalize_bucket_order_pads_to_four(self) -> None:
        self.assertEqual(UserService.normalize_bucket_order(None), ["", "", "", ""])
        self.assertEqual(
            UserService.normalize_bucket_order(["b1"]), ["b1", "", "", ""]
        )

    def test_normalize_bucket_order_rejects_too_many(self) -> None:
        with self.assertRaises(ValidationError):
            UserService.normalize_bucket_order(["a", "b", "c", "d", "e"])

    def test_create_user_provisions_four_owned_buckets(self) -> None:
        user = UserService.create_user(self.db, "u1", "Alice@Example.com", "Alice", "Smith")

        self.assertEqual(user["email"], "alice@example.com")
        self.assertEqual(user["name"], "Alice Smith")
        order = user_data(self.db, "u1")["bucketOrder"]
        self.assertEqual(len(order), 4)
        self.assertEqual(len(set(order)), 4)
        for bucket_id in order:
            self.assertTrue(bucket_id.startswith("bucket-"))
            bucket = bucket_data(self.db, bucket_id)
            self.assertEqual(bucket["ownerEmail"], "alice@example.com")
            self.assertEqual(bucket["collaborators"], ["alice@example.com"])
            self.assertEqual(bucket["bucketTitle"], "")
            self.assertIsNone(bucket["inviteCode"])

    def test_create_user_rejects_duplicate_email_ignoring_case(self) -> None:
        UserService.create_user(self.db, "u1", "alice@example.com", "Alice", "Smith")
        with self.assertRaises(DuplicateResourceError):
            UserService.create_user(self.db, "u2", "ALICE@example.com", "Al", "Ice")

    def test_provision_slots_keeps_existing_and_is_idempotent(self) -> None:
        seed_user(self.db, "u1", "alice@example.com", ["shared-1", "", "", ""])
        self.db.collection("buckets").document("shared-1").set(
            {
                "bucketId": "shared-1",
                "bucketTitle": "Trips",
                "ownerEmail": "bob@example.com",
                "collaborators": ["bob@example.com", "alice@example.com"],
            }
        )

        order = UserService.provision_slots(
            self.db, "u1", "alice@example.com", ["shared-1", "", "", ""]
        )
        self.assertEqual(order[0], "shared-1")
        self.assertTrue(all(order))
        # The pre-existing bucket keeps its owner.
        self.assertEqual(bucket_data(self.db, "shared-1")["ownerEmail"], "bob@example.com")

        again = UserService.provision_slots(self.db, "u1", "alice@example.com", order)
        self.assertEqual(again, order)
        buckets = [d for d in self.db.collection("buckets").stream() if d.exists]
        self.assertEqual(len(buckets), 4)

    def test_get_user_by_email_is_case_insensitive(self) -> None:
        seed_user(self.db, "u1", "alice@example.com", ["", "", "", ""])
        user = UserService.get_user_by_email(self.db, "  Alice@EXAMPLE.com ")
        self.assertIsNotNone(user)
        self.assertEqual(user["id"], "u1")
        self.assertIsNone(UserService.get_user_by_email(self.db, "nobody@example.com"))

    def test_find_slot(self) -> None:
        order = ["a", "", "b", ""]
        self.assertEqual(UserService.find_slot(order, "b"), 2)
        self.assertIsNone(UserService.find_slot(order, "c"))
        self.assertIsNone(UserService.find_slot(order, ""))

    def test_assign_slot_returns_previous_value(self) -> None:
        seed_user(self.db, "u1", "alice@example.com", ["a", "b", "", ""])
        old = UserService.assign_slot(self.db, "u1", 1, "z")
        self.assertEqual(old, "b")
        self.assertEqual(user_data(self.db, "u1")["bucketOrder"], ["a", "z", "", ""])

    def test_clear_slots_for_bucket(self) -> None:
        seed_user(self.db, "u1", "alice@example.com", ["a", "shared", "", ""])
        user = UserService.get_user_by_id(self.db, "u1")
        cleared = UserService.clear_slots_for_bucket(self.db, user, "shared")
        self.assertEqual(cleared, [1])
        self.assertEqual(user_data(self.db, "u1")["bucketOrder"], ["a", "", "", ""])
        self.assertEqual(UserService.clear_slots_for_bucket(self.db, user, "zzz"), [])


if __name__ == "__main__":
    unittest.main()
