import pytest

from shared.storage import JsonFileStore


def test_set_get_remove(tmp_path):
    store = JsonFileStore(tmp_path)

    store.set("favorites", ["1", "2"])
    assert store.get("favorites") == ["1", "2"]
    assert "favorites" in store

    store.remove("favorites")
    assert store.get("favorites", []) == []
    store.remove("favorites")


def test_values_survive_a_new_store_instance(tmp_path):
    JsonFileStore(tmp_path).namespace("clients").set("authUser", {"id": "7"})

    assert JsonFileStore(tmp_path).namespace("clients").get("authUser") == {"id": "7"}


def test_namespaces_do_not_share_keys(tmp_path):
    store = JsonFileStore(tmp_path)
    store.namespace("a").set("k", 1)

    assert store.namespace("b").get("k") is None


def test_corrupt_value_falls_back_to_default(tmp_path):
    store = JsonFileStore(tmp_path)
    (tmp_path / "schools.json").write_text("[{", encoding="utf-8")

    assert store.get("schools", "fallback") == "fallback"


@pytest.mark.parametrize("name", ["", "..", "../escape", "a/b"])
def test_invalid_names_are_rejected(tmp_path, name):
    store = JsonFileStore(tmp_path)

    with pytest.raises(ValueError):
        store.namespace(name)
