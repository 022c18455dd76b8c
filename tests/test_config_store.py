import json

import pytest

from irishub.config_store import (
    ConfigStore,
    looks_like_answer,
    new_app_id,
    parse_document,
    steps_from_legacy,
)
from irishub.errors import ConfigError
from irishub.models import ApplicationConfig, CommandStep


def _app(app_id="", name="App", steps=(CommandStep("npm run dev"),)):
    return ApplicationConfig(id=app_id, name=name, icon="react", working_dir="/srv/app", steps=steps)


def test_missing_file_means_no_apps(store):
    assert store.load_all() == []


def test_save_assigns_an_id_and_persists(store):
    saved = store.save(_app(name="Frontend"))

    assert saved.id
    reloaded = ConfigStore(store.path)
    assert reloaded.load_all() == [saved]
    assert reloaded.get(saved.id).name == "Frontend"


def test_save_replaces_in_place(store):
    a = store.save(_app("a", "A"))
    store.save(_app("b", "B"))
    store.save(a.with_changes(name="A2"))

    assert [x.name for x in store.load_all()] == ["A2", "B"]


def test_steps_with_inputs_round_trip_through_the_file(store):
    steps = (CommandStep("setPath.bat", ("18.12.0",)), CommandStep("mvn spring-boot:run"))
    store.save(_app("b", "Backend", steps=steps))

    raw = json.loads(store.path.read_text(encoding="utf-8"))
    assert raw["apps"][0]["steps"] == [
        {"command": "setPath.bat", "inputs": ["18.12.0"]},
        {"command": "mvn spring-boot:run"},
    ]
    assert ConfigStore(store.path).get("b").steps == steps


def test_delete(store):
    store.save(_app("a"))

    assert store.delete("a") is True
    assert store.delete("a") is False
    assert store.get("a") is None


def test_reorder(store):
    for app_id in ("a", "b", "c", "d"):
        store.save(_app(app_id))

    store.reorder(["c", "a", "zzz"])

    assert [x.id for x in store.load_all()] == ["c", "a", "b", "d"]
    assert [x.id for x in ConfigStore(store.path).load_all()] == ["c", "a", "b", "d"]


def test_corrupt_file_starts_empty(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")

    assert ConfigStore(path).load_all() == []


def test_export_then_import_appends_with_new_ids(store, tmp_path):
    store.save(_app("a", "A"))
    store.save(_app("b", "B"))
    exported = tmp_path / "export.json"
    store.export_to(exported)

    imported = store.import_from(exported)

    assert [x.name for x in imported] == ["A", "B"]
    assert {x.id for x in imported}.isdisjoint({"a", "b"})
    assert [x.name for x in store.load_all()] == ["A", "B", "A", "B"]
    assert len({x.id for x in store.load_all()}) == 4


def test_import_accepts_a_bare_list(store, tmp_path):
    path = tmp_path / "list.json"
    path.write_text(json.dumps([_app("x", "X").to_dict()]), encoding="utf-8")

    assert [x.name for x in store.import_from(path)] == ["X"]


@pytest.mark.parametrize("content", ["{broken", '"just a string"', '{"apps": 3}'])
def test_import_rejects_bad_files(store, tmp_path, content):
    path = tmp_path / "bad.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError):
        store.import_from(path)
    assert store.load_all() == []


def test_import_missing_file(store, tmp_path):
    with pytest.raises(ConfigError):
        store.import_from(tmp_path / "nope.json")


def test_legacy_command_lists_are_migrated():
    apps = parse_document(
        {
            "apps": [
                {
                    "id": "1",
                    "name": "Backend",
                    "icon_emoji": "java",
                    "working_dir": "C:\\Projects\\api",
                    "commands": ["setPath.bat", "18.12.0", "mvn spring-boot:run"],
                }
            ]
        }
    )

    assert apps[0].icon == "java"
    assert apps[0].steps == (
        CommandStep("setPath.bat", ("18.12.0",)),
        CommandStep("mvn spring-boot:run"),
    )


def test_steps_from_legacy_only_pairs_answers_with_batch_files():
    assert steps_from_legacy(["npm install", "1", "run.cmd", "y"]) == [
        CommandStep("npm install"),
        CommandStep("1"),
        CommandStep("run.cmd", ("y",)),
    ]


@pytest.mark.parametrize("line, expected", [("18.12.0", True), ("2", True), ("Y", True), ("npm i", False), ("", False)])
def test_looks_like_answer(line, expected):
    assert looks_like_answer(line) is expected


def test_new_app_id_is_unique_and_increasing():
    ids = [int(new_app_id()) for _ in range(500)]
    assert ids == sorted(ids)
    assert len(set(ids)) == len(ids)
