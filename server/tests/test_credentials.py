import unittest

from core.credentials import CredentialStore
from core.errors import BadCredentials, DuplicateUser, UserNotFound, ValidationError
from support import make_session


class CredentialStoreTests(unittest.TestCase):
    def setUp(self):
        self.db = make_session()
        self.addCleanup(self.db.close)
        self.store = CredentialStore(self.db)

    def test_register_returns_new_user_with_hashed_password(self):
        user = self.store.register("alice", "pw1")
        self.assertTrue(user.id)
        self.assertEqual(user.username, "alice")
        self.assertNotEqual(user.password_hash, "pw1")
        self.assertNotIn("pw1", user.password_hash)

    def test_register_same_username_twice_fails(self):
        self.store.register("alice", "pw1")
        with self.assertRaises(DuplicateUser):
            self.store.register("alice", "other")

    def test_usernames_are_case_sensitive(self):
        first = self.store.register("alice", "pw1")
        second = self.store.register("Alice", "pw1")
        self.assertNotEqual(first.id, second.id)

    def test_same_password_gets_different_salt(self):
        a = self.store.register("alice", "same")
        b = self.store.register("bob", "same")
        self.assertNotEqual(a.password_hash, b.password_hash)

    def test_register_rejects_blank_input(self):
        with self.assertRaises(ValidationError):
            self.store.register("", "pw")
        with self.assertRaises(ValidationError):
            self.store.register("alice", "")

    def test_verify_succeeds_only_with_registered_password(self):
        alice = self.store.register("alice", "pw1")
        self.store.register("bob", "pw2")

        self.assertEqual(self.store.verify("alice", "pw1").id, alice.id)
        with self.assertRaises(BadCredentials):
            self.store.verify("alice", "pw2")
        with self.assertRaises(BadCredentials):
            self.store.verify("alice", "")

    def test_verify_unknown_user(self):
        with self.assertRaises(UserNotFound):
            self.store.verify("nobody", "pw")


if __name__ == "__main__":
    unittest.main()
