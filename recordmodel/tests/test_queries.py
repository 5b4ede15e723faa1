"""Tests for class-level query helpers."""

from unittest.mock import patch

import pytest
from sample_models import Article, Author, Note

from recordmodel.domain.exceptions import InvalidFieldError, InvalidSortError, RecordNotFoundError
from recordmodel.repositories import RecordRepository
from recordmodel.repositories import base as repository_module


class TestGetById:
    """Tests for get_by_id and get_or_fail."""

    @pytest.mark.parametrize("bad_id", ["abc", 0, -4, None, "", True, 3.5j])
    def test_invalid_id_returns_false_without_query(self, provider, statements, bad_id):
        assert Article.get_by_id(bad_id) is False
        assert statements == []

    def test_invalid_id_needs_no_provider(self):
        assert Article.get_by_id("abc") is False

    def test_found_record_is_attached(self, db_session, test_article):
        found = Article.get_by_id(test_article.id)

        assert found.id == test_article.id
        assert found.title == "Hello World"
        assert found in db_session

    def test_trailing_garbage_is_rejected(self, provider, test_article, statements):
        # the only article has id 1
        assert Article.get_by_id("1abc") is False
        assert statements == []

    def test_numeric_string_is_coerced(self, test_article):
        found = Article.get_by_id(str(test_article.id))

        assert found.id == test_article.id

    def test_missing_record_returns_none(self, provider):
        assert Article.get_by_id(404) is None

    def test_get_or_fail_raises(self, provider):
        with pytest.raises(RecordNotFoundError) as exc_info:
            Article.get_or_fail(404)

        assert "Article" in exc_info.value.message

    def test_get_or_fail_rejects_invalid_id(self, provider):
        with pytest.raises(RecordNotFoundError):
            Article.get_or_fail("abc")

    def test_get_or_fail_returns_record(self, test_article):
        assert Article.get_or_fail(test_article.id).id == test_article.id


class TestLoadByIds:
    def test_loads_matching_records(self, ten_notes):
        loaded = Note.load_by_ids([2, 4, 99])

        assert sorted(note.id for note in loaded) == [2, 4]

    def test_empty_ids(self, ten_notes):
        assert Note.load_by_ids([]) == []


class TestGetAll:
    """Tests for get_all sorting rules."""

    def test_default_sort_is_used(self, authors):
        names = [author.name for author in Author.get_all()]

        assert names == ["Alice", "Bob", "Mallory", "Zed"]

    def test_bare_field_name_sorts_ascending(self, authors):
        names = [author.name for author in Author.get_all("name")]

        assert names == ["Alice", "Bob", "Mallory", "Zed"]

    def test_explicit_sort_overrides_default(self, authors):
        names = [author.name for author in Author.get_all({"name": "desc"})]

        assert names == ["Zed", "Mallory", "Bob", "Alice"]

    def test_no_default_sort_returns_everything(self, ten_notes):
        assert len(Note.get_all()) == 10

    def test_invalid_direction_raises(self, authors):
        with pytest.raises(InvalidSortError):
            Author.get_all({"name": "sideways"})

    def test_unknown_field_raises(self, authors):
        with pytest.raises(InvalidFieldError):
            Author.get_all("nickname")


class TestRecent:
    """Tests for get_recent and get_last."""

    def test_get_recent_returns_highest_ids_first(self, ten_notes):
        recent = Note.get_recent(3)

        assert [note.id for note in recent] == [10, 9, 8]

    def test_get_recent_default_limit(self, provider):
        for number in range(1, 26):
            Note(text=f"note {number}").save()

        recent = Note.get_recent()

        assert [note.id for note in recent] == list(range(25, 5, -1))

    def test_get_recent_uses_configured_limit(self, ten_notes):
        with patch.object(repository_module.settings, "recent_limit", 4):
            recent = Note.get_recent()

        assert [note.id for note in recent] == [10, 9, 8, 7]

    def test_get_recent_returns_all_when_fewer_rows(self, ten_notes):
        assert len(Note.get_recent()) == 10

    def test_get_last(self, ten_notes):
        assert Note.get_last().id == 10

    def test_get_last_empty_table(self, provider):
        assert Note.get_last() is None


class TestFactory:
    def test_factory_builds_concrete_class(self):
        author = Author.factory()

        assert type(author) is Author
        assert author.is_new

    def test_repository_is_bound_to_model(self, provider):
        repository = Note.repository()

        assert isinstance(repository, RecordRepository)
        assert repository.model is Note
        assert repository.provider is provider
        assert isinstance(repository.factory(), Note)

    def test_repository_find_by(self, ten_notes):
        repository = Note.repository()

        found = repository.find_by({"text": "note 3"})

        assert [note.id for note in found] == [3]
