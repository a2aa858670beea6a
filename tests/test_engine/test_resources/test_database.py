import pytest
import json
import shutil
from engine.resources.database import Database

@pytest.fixture
def mock_db_path(tmp_path, schemas_dir):
    # Setup mock directory structure in tmp_path
    shutil.copytree(schemas_dir, tmp_path / "schemas")

    database = tmp_path / "database"
    database.mkdir()
    (database / "characters").mkdir()
    (database / "scenes").mkdir()

    return tmp_path

def write_json(path, data):
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f)

def test_load_all(mock_db_path):
    write_json(mock_db_path / "database" / "characters" / "cast.json", [
        {"id": "mira", "emotions": ["neutral"], "expressions": {"neutral": "mira.png"}},
        {"id": "oren"},
    ])
    write_json(mock_db_path / "database" / "scenes" / "intro.json", {
        "id": "intro",
        "lines": [{"speaker": "mira", "side": "left", "text": "Hello."}],
    })

    db = Database(mock_db_path)
    db.load_all()

    assert set(db.characters) == {"mira", "oren"}
    assert db.get_character("mira")["expressions"]["neutral"] == "mira.png"
    assert db.get_scene("intro")["lines"][0]["text"] == "Hello."
    assert db.get_scene("missing") is None

def test_validation_error_skips_record(mock_db_path):
    write_json(mock_db_path / "database" / "scenes" / "broken.json", [
        {"id": "bad_side", "lines": [{"side": "middle", "text": "?"}]},
        {"id": "bad_rate", "lines": [{"text": "?", "reveal_rate": 0}]},
        {"id": "no_lines"},
        {"id": "empty", "lines": []},
        {"id": "ok", "lines": [{"text": "Fine."}]},
    ])

    db = Database(mock_db_path)
    db.load_all()

    assert set(db.scenes) == {"ok"}

def test_malformed_json_is_skipped(mock_db_path, caplog):
    (mock_db_path / "database" / "characters" / "broken.json").write_text("{ not json")
    write_json(mock_db_path / "database" / "characters" / "good.json", {"id": "mira"})

    db = Database(mock_db_path)
    db.load_all()

    assert set(db.characters) == {"mira"}
    assert "Failed to load" in caplog.text

def test_missing_schema(mock_db_path):
    write_json(mock_db_path / "database" / "characters" / "mira.json", {"id": "mira"})
    (mock_db_path / "schemas" / "character.schema.json").unlink()

    db = Database(mock_db_path)
    db.load_all()

    # Categories without a schema are not loaded
    assert "mira" not in db.characters

def test_missing_directories(tmp_path):
    db = Database(tmp_path)
    db.load_all()

    assert db.characters == {}
    assert db.scenes == {}
