import unittest
from datetime import datetime, timezone

from core.credentials import CredentialStore
from core.errors import Forbidden, NotFound, ValidationError
from core.policy import can_mutate
from core.posts import PostFields, PostRepository
from support import make_session


class PostRepositoryTests(unittest.TestCase):
    def setUp(self):
        self.db = make_session()
        self.addCleanup(self.db.close)
        users = CredentialStore(self.db)
        self.alice = users.register("alice", "pw1")
        self.bob = users.register("bob", "pw2")
        self.posts = PostRepository(self.db)

    def _create(self, title="Hi", author=None):
        author = author or self.alice
        return self.posts.create(
            author.id,
            PostFields(title=title, summary="s", content="c", cover="uploads/a.png"),
        )

    def test_create_links_author_and_timestamps(self):
        post = self._create()
        self.assertTrue(post.id)
        self.assertEqual(post.author_id, self.alice.id)
        self.assertEqual(post.author.username, "alice")
        self.assertIsNotNone(post.created_at)

    def test_create_requires_title(self):
        with self.assertRaises(ValidationError):
            self.posts.create(self.alice.id, PostFields(title="  ", cover="uploads/a.png"))

    def test_get_unknown_post(self):
        with self.assertRaises(NotFound):
            self.posts.get_by_id("does-not-exist")

    def test_list_all_is_newest_first_regardless_of_insertion_order(self):
        stamps = {
            "middle": datetime(2024, 2, 1, tzinfo=timezone.utc),
            "oldest": datetime(2024, 1, 1, tzinfo=timezone.utc),
            "newest": datetime(2024, 3, 1, tzinfo=timezone.utc),
        }
        for title, created_at in stamps.items():
            post = self._create(title=title)
            post.created_at = created_at
        self.db.commit()

        titles = [p.title for p in self.posts.list_all()]
        self.assertEqual(titles, ["newest", "middle", "oldest"])

    def test_list_all_requeries_on_each_call(self):
        self._create(title="first")
        pending = self.posts.list_all()
        self._create(title="second")

        self.assertEqual(len(list(pending)), 2)
        self.assertEqual(len(list(self.posts.list_all())), 2)

    def test_non_author_update_is_forbidden_and_changes_nothing(self):
        post = self._create(title="Hi")
        with self.assertRaises(Forbidden):
            self.posts.update(
                post.id,
                self.bob.id,
                PostFields(title="Hacked", summary="x", content="x", cover="uploads/b.png"),
            )

        self.db.expire_all()
        stored = self.posts.get_by_id(post.id)
        self.assertEqual(stored.title, "Hi")
        self.assertEqual(stored.cover, "uploads/a.png")
        self.assertEqual(stored.author_id, self.alice.id)

    def test_update_merges_only_supplied_fields(self):
        post = self._create(title="Hi")
        updated = self.posts.update(post.id, self.alice.id, PostFields(title="Updated"))

        self.assertEqual(updated.title, "Updated")
        self.assertEqual(updated.summary, "s")
        self.assertEqual(updated.content, "c")
        self.assertEqual(updated.cover, "uploads/a.png")
        self.assertEqual(updated.author_id, self.alice.id)

    def test_update_replaces_cover_when_supplied(self):
        post = self._create()
        updated = self.posts.update(post.id, self.alice.id, PostFields(cover="uploads/new.png"))
        self.assertEqual(updated.cover, "uploads/new.png")

    def test_update_rejects_blank_title(self):
        post = self._create()
        with self.assertRaises(ValidationError):
            self.posts.update(post.id, self.alice.id, PostFields(title=""))

    def test_update_unknown_post(self):
        with self.assertRaises(NotFound):
            self.posts.update("missing", self.alice.id, PostFields(title="x"))

    def test_can_mutate_only_for_author(self):
        post = self._create()
        self.assertTrue(can_mutate(post, self.alice.id))
        self.assertFalse(can_mutate(post, self.bob.id))


if __name__ == "__main__":
    unittest.main()
