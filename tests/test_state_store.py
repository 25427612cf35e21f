"""Tests for snapshot key derivation and the on-disk state store."""

import hashlib
import os
import tempfile
import unittest
from unittest import mock

from watchurl import (
    MAX_KEY_LEN,
    ConfigurationError,
    StateIOError,
    StateStore,
    derive_key,
)


class TestDeriveKey(unittest.TestCase):
    def test_deterministic(self):
        url = "https://example.com/news?page=2"
        self.assertEqual(derive_key(url), derive_key(url))

    def test_digest_prefix_and_sanitized_suffix(self):
        url = "https://example.com/a-b"
        digest = hashlib.sha1(url.encode("utf-8")).hexdigest()
        self.assertEqual(derive_key(url), f"{digest}_https_example_com_a_b")

    def test_runs_of_special_chars_collapse(self):
        key = derive_key("http://x//y??z")
        self.assertTrue(key.endswith("_http_x_y_z"))

    def test_non_ascii_is_replaced(self):
        key = derive_key("https://例え.jp/ü")
        self.assertTrue(key.isascii())
        self.assertNotIn("/", key)

    def test_bounded_length(self):
        url = "https://example.com/" + "segment/" * 100
        key = derive_key(url)
        self.assertEqual(len(key), MAX_KEY_LEN)
        self.assertLessEqual(len(derive_key("http://a")), MAX_KEY_LEN)

    def test_custom_bound(self):
        self.assertEqual(len(derive_key("https://example.com/long/path", max_len=45)), 45)

    def test_different_urls_differ(self):
        self.assertNotEqual(derive_key("https://example.com/a"), derive_key("https://example.com/b"))
        # identical sanitized forms still differ by digest
        self.assertNotEqual(derive_key("https://example.com/a.b"), derive_key("https://example.com/a_b"))


class TestStateStore(unittest.TestCase):
    def test_read_missing_returns_none(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = StateStore(tmpdir)
            self.assertIsNone(store.read("https://example.com"))

    def test_write_then_read(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = StateStore(tmpdir)
            store.write("https://example.com", "Hello\r\nworld ✓\n")
            self.assertEqual(store.read("https://example.com"), "Hello\r\nworld ✓\n")

    def test_write_creates_directories(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            nested = os.path.join(tmpdir, "a", "b")
            store = StateStore(nested)
            store.write("https://example.com", "x")
            self.assertTrue(os.path.isfile(os.path.join(nested, derive_key("https://example.com"))))

    def test_write_overwrites_and_leaves_no_temp_files(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = StateStore(tmpdir)
            store.write("https://example.com", "first")
            store.write("https://example.com", "second")
            self.assertEqual(store.read("https://example.com"), "second")
            self.assertEqual(os.listdir(tmpdir), [derive_key("https://example.com")])

    def test_file_contents_are_raw_text(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = StateStore(tmpdir)
            store.write("https://example.com", "plain snapshot")
            with open(store.path_for("https://example.com"), "rb") as f:
                self.assertEqual(f.read(), b"plain snapshot")

    def test_empty_snapshot_is_not_missing(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = StateStore(tmpdir)
            store.write("https://example.com", "")
            self.assertEqual(store.read("https://example.com"), "")

    def test_read_error_is_distinct_from_missing(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = StateStore(tmpdir)
            os.makedirs(store.path_for("https://example.com"))
            with self.assertRaises(StateIOError):
                store.read("https://example.com")

    def test_write_error(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            blocker = os.path.join(tmpdir, "not-a-dir")
            with open(blocker, "w") as f:
                f.write("")
            store = StateStore(blocker)
            with self.assertRaises(StateIOError):
                store.write("https://example.com", "text")

    def test_home_expansion(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with mock.patch.dict(os.environ, {"HOME": tmpdir}):
                store = StateStore("~/.watchurl/")
                self.assertTrue(store.path_for("https://example.com").startswith(tmpdir))

    def test_unresolvable_home_is_configuration_error(self):
        store = StateStore("~/.watchurl/")
        with mock.patch("watchurl.os.path.expanduser", side_effect=lambda p: p):
            with self.assertRaises(ConfigurationError):
                store.read("https://example.com")
            with self.assertRaises(ConfigurationError):
                store.write("https://example.com", "x")


if __name__ == "__main__":
    unittest.main()
