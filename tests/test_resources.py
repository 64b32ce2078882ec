"""Tests for the classpath resource store."""

import logging
import zipfile

from locator import ArchiveRoot, DirectoryRoot, ResourceStore


class TestDirectoryRoot:
    """Directory-backed roots."""

    def test_read_and_exists(self, classpath):
        classpath.add_file("META-INF/a/b.txt", "hello")
        root = DirectoryRoot(str(classpath.root))
        assert root.exists("META-INF/a/b.txt")
        assert root.exists("/META-INF/a/b.txt")
        assert root.read_bytes("META-INF/a/b.txt") == b"hello"
        assert root.read_bytes("META-INF/a/missing.txt") is None
        assert not root.exists("META-INF/a")

    def test_refuses_escaping_paths(self, classpath, tmp_path):
        (tmp_path / "secret.txt").write_text("nope")
        root = DirectoryRoot(str(classpath.root))
        assert not root.exists("../secret.txt")
        assert root.read_bytes("../secret.txt") is None

    def test_iter_paths_sorted(self, classpath):
        classpath.add_file("p/b.txt", "b")
        classpath.add_file("p/a/c.txt", "c")
        classpath.add_file("q/d.txt", "d")
        root = DirectoryRoot(str(classpath.root))
        assert list(root.iter_paths("p")) == ["p/b.txt", "p/a/c.txt"]
        assert list(root.iter_paths("missing")) == []


class TestArchiveRoot:
    """Jar/zip-backed roots."""

    def test_reads_members(self, tmp_path):
        jar = tmp_path / "lib.jar"
        with zipfile.ZipFile(jar, "w") as zf:
            zf.writestr("META-INF/x/", "")
            zf.writestr("META-INF/x/y.json", "{}")
        root = ArchiveRoot(str(jar))
        try:
            assert root.exists("META-INF/x/y.json")
            assert not root.exists("META-INF/x/")
            assert root.read_bytes("META-INF/x/y.json") == b"{}"
            assert root.read_bytes("nope") is None
            assert list(root.iter_paths("META-INF")) == ["META-INF/x/y.json"]
        finally:
            root.close()


class TestResourceStore:
    """First-match-wins lookups over several roots."""

    def test_first_root_wins(self, tmp_path):
        first = tmp_path / "first"
        second = tmp_path / "second"
        for base, text in ((first, "one"), (second, "two")):
            (base / "res").mkdir(parents=True)
            (base / "res" / "file.txt").write_text(text)
        (second / "res" / "only-second.txt").write_text("2")

        store = ResourceStore.from_paths([str(first), str(second)])
        assert store.read_text("res/file.txt") == "one"
        assert store.read_text("res/only-second.txt") == "2"
        assert list(store.iter_paths("res")) == ["res/file.txt", "res/only-second.txt"]

    def test_mixes_directories_and_archives(self, classpath, tmp_path):
        classpath.add_file("META-INF/resources/webjars/lib/1.0/lib.js", "lib")
        jar = classpath.zip_to(str(tmp_path / "lib.jar"))
        other = tmp_path / "dir"
        (other / "extra").mkdir(parents=True)
        (other / "extra" / "x.txt").write_text("x")

        store = ResourceStore.from_paths([jar, str(other)])
        try:
            assert store.exists("META-INF/resources/webjars/lib/1.0/lib.js")
            assert store.read_text("extra/x.txt") == "x"
        finally:
            store.close()

    def test_read_text_strips_bom_and_replaces_bad_bytes(self, classpath):
        classpath.add_file("a.txt", b"\xef\xbb\xbfok\xff")
        store = classpath.store()
        assert store.read_text("a.txt") == "ok\ufffd"
        assert store.read_text("missing.txt") is None

    def test_bad_entries_are_skipped(self, tmp_path, caplog):
        not_a_jar = tmp_path / "broken.jar"
        not_a_jar.write_bytes(b"not a zip")
        plain = tmp_path / "notes.txt"
        plain.write_text("x")
        with caplog.at_level(logging.WARNING):
            store = ResourceStore.from_paths([str(not_a_jar), str(plain), str(tmp_path / "missing"), ""])
        assert store.roots == []
        assert "Skipping" in caplog.text
        assert not store.exists("anything")
