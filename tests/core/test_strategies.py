"""Tests for item classification and key normalization."""

import os

import pytest

from mru_frecency.core.settings import ClassifierKind
from mru_frecency.core.strategies import (
    Classifier,
    ItemKind,
    KeyNormalizer,
    PathOnlyClassifier,
    PathOrTextClassifier,
    create_classifier,
)


class TestPathOrTextClassifier:
    """Heuristic used by mixed path/text stores."""

    @pytest.mark.parametrize("raw", ["/a/b", "~/a", "~", "/", "src/main", "src\\main", "./x"])
    def test_paths(self, raw):
        assert PathOrTextClassifier().classify(raw) is ItemKind.PATH

    @pytest.mark.parametrize(
        "raw",
        [" leading space", "trailing space ", "plain query", "single", " with/slash", "tab\t"],
    )
    def test_text(self, raw):
        assert PathOrTextClassifier().classify(raw) is ItemKind.TEXT

    def test_absolute_path_wins_over_trailing_space(self):
        """A leading / or ~ makes a path even with surrounding whitespace."""
        assert PathOrTextClassifier().classify("/tmp/file ") is ItemKind.PATH

    def test_satisfies_protocol(self):
        assert isinstance(PathOrTextClassifier(), Classifier)
        assert isinstance(PathOnlyClassifier(), Classifier)


class TestPathOnlyClassifier:
    def test_everything_is_a_path(self):
        classifier = PathOnlyClassifier()
        assert classifier.classify("plain query") is ItemKind.PATH
        assert classifier.classify("file.txt") is ItemKind.PATH


class TestCreateClassifier:
    def test_auto(self):
        assert isinstance(create_classifier(ClassifierKind.AUTO), PathOrTextClassifier)

    def test_path(self):
        assert isinstance(create_classifier(ClassifierKind.PATH), PathOnlyClassifier)


class TestKeyNormalizer:
    """Keys are canonical and normalizing twice changes nothing."""

    @pytest.fixture
    def normalizer(self):
        return KeyNormalizer(PathOrTextClassifier())

    def test_text_is_unchanged(self, normalizer):
        assert normalizer.key_for("plain query") == ("plain query", ItemKind.TEXT)
        assert normalizer.key_for(" padded ") == (" padded ", ItemKind.TEXT)

    def test_home_is_expanded(self, normalizer):
        key, kind = normalizer.key_for("~/notes/todo.md")
        assert kind is ItemKind.PATH
        assert key == os.path.join(os.path.expanduser("~"), "notes", "todo.md")

    def test_relative_path_becomes_absolute(self, normalizer, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        key, _ = normalizer.key_for("src/main.py")
        assert key == os.path.join(str(tmp_path), "src", "main.py")

    def test_dot_segments_are_collapsed(self, normalizer):
        key, _ = normalizer.key_for("/a/b/../c/./d")
        assert key == os.path.normpath("/a/c/d")

    def test_trailing_separator_is_dropped(self, normalizer):
        key, _ = normalizer.key_for("/a/b/")
        assert key == os.path.normpath("/a/b")

    @pytest.mark.parametrize(
        "raw", ["/a/b", "~/a", "src/main", "a/../b", "plain query", " padded", "/x/./y/"]
    )
    def test_idempotent(self, normalizer, raw):
        once, _ = normalizer.key_for(raw)
        twice, _ = normalizer.key_for(once)
        assert once == twice

    def test_explicit_kind_skips_classification(self, normalizer, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        key, kind = normalizer.key_for("file.txt", ItemKind.PATH)
        assert kind is ItemKind.PATH
        assert key == os.path.join(str(tmp_path), "file.txt")
