from __future__ import annotations

import json

import pytest

import mbti_core.storage as storage
from mbti_core.errors import DataUnavailable, PersistenceFailed
from mbti_core.storage import FileContentRepository, FileProfileStore


def test_persist_upserts_code_and_keeps_profile_fields(tmp_path):
    (tmp_path / "profiles.json").write_text(
        json.dumps({"u1": {"id": "u1", "first_name": "Sam", "date_of_birth": "2001-04-02"}}),
        encoding="utf-8",
    )
    store = FileProfileStore(tmp_path)
    store.persist("u1", "INTP")
    store.persist("u1", "ENTP")
    store.persist("u2", "ISFJ")

    prof = store.profile("u1")
    assert prof["mbti_personality"] == "ENTP"
    assert prof["first_name"] == "Sam" and prof["date_of_birth"] == "2001-04-02"
    assert store.profile("u2")["mbti_personality"] == "ISFJ"
    assert store.profile("nobody") is None


def test_write_error_surfaces_as_persistence_failed(tmp_path, monkeypatch):
    def _fail(path, payload):
        raise OSError("read-only file system")

    monkeypatch.setattr(storage, "_write_json", _fail)
    with pytest.raises(PersistenceFailed):
        FileProfileStore(tmp_path).persist("u1", "ESTJ")


def test_corrupt_profile_table_surfaces_as_persistence_failed(tmp_path):
    (tmp_path / "profiles.json").write_text("{not json", encoding="utf-8")
    store = FileProfileStore(tmp_path)
    with pytest.raises(PersistenceFailed):
        store.persist("u1", "ESTJ")
    with pytest.raises(DataUnavailable):
        store.profile("u1")


@pytest.mark.parametrize("table", [[], ["u1"], {"u1": "ENFP"}])
def test_profile_table_of_wrong_shape_is_unavailable(tmp_path, table):
    (tmp_path / "profiles.json").write_text(json.dumps(table), encoding="utf-8")
    store = FileProfileStore(tmp_path)
    with pytest.raises(PersistenceFailed):
        store.persist("u1", "ESTJ")
    with pytest.raises(DataUnavailable):
        store.profile("u1")


def _write(tmp_path, name, rows):
    (tmp_path / name).write_text(json.dumps(rows), encoding="utf-8")


def test_file_content_repository_filters_rows(tmp_path):
    _write(tmp_path, "mbti_info.json", [
        {"trait": "INFJ", "age_from": 13, "age_to": 17, "info": "teen", "trait_": "Introverted Intuitive Feeling Judging"},
        {"trait": "INFJ", "age_from": 18, "age_to": 99, "info": "adult"},
    ])
    _write(tmp_path, "mbti_videos.json", [
        {"trait": "INFJ", "title": "v1", "url": "https://example.org/1", "thumbnail_url": "https://example.org/1.jpg"},
        {"trait": "ENTJ", "title": "v2", "url": "https://example.org/2"},
    ])
    repo = FileContentRepository(tmp_path)

    assert repo.descriptive("INFJ", 15).info == "teen"
    assert repo.descriptive("INFJ", 40).info == "adult"
    assert repo.descriptive("INFJ", 12) is None
    assert [v.title for v in repo.videos("INFJ")] == ["v1"]
    assert repo.books("INFJ") == []  # missing table reads as empty


def test_malformed_content_rows_are_data_failures(tmp_path):
    _write(tmp_path, "mbti_info.json", [{"trait": "INFJ", "age_from": "x", "age_to": 20}])
    _write(tmp_path, "mbti_books.json", {"not": "a list"})
    repo = FileContentRepository(tmp_path)
    with pytest.raises(DataUnavailable):
        repo.descriptive("INFJ", 15)
    with pytest.raises(DataUnavailable):
        repo.books("INFJ")
