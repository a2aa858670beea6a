import json
import pytest
from novel.dialogue.config import DialogueConfig, load_config

def test_defaults():
    config = DialogueConfig()

    assert config.blip_stride == 2
    assert config.backdrop_color == (0, 0, 0, 160)
    assert config.music_loop is True
    assert config.volumes == {"master": 1.0, "music": 1.0, "voice": 1.0}

def test_from_dict():
    config = DialogueConfig.from_dict({
        "blip_stride": 3,
        "backdrop_color": [1, 2, 3, 4],
        "music_fade_ms": 0,
        "volumes": {"music": 0.5},
    })

    assert config.blip_stride == 3
    assert config.backdrop_color == (1, 2, 3, 4)
    assert config.music_fade_ms == 0
    assert config.volumes["music"] == 0.5
    assert config.volumes["voice"] == 1.0

def test_to_dict_is_json_ready():
    data = DialogueConfig(backdrop_color=(5, 5, 5, 5)).to_dict()

    assert data["backdrop_color"] == [5, 5, 5, 5]
    assert DialogueConfig.from_dict(json.loads(json.dumps(data))) == DialogueConfig(backdrop_color=(5, 5, 5, 5))

def test_invalid_values():
    with pytest.raises(ValueError):
        DialogueConfig(blip_stride=0)
    with pytest.raises(ValueError):
        DialogueConfig(backdrop_color=(0, 0, 0))

def test_load_config(tmp_path):
    path = tmp_path / "dialogue.json"
    path.write_text(json.dumps({"blip_stride": 4, "volumes": {"voice": 0.25}}))

    config = load_config(path)

    assert config.blip_stride == 4
    assert config.volumes["voice"] == 0.25

def test_load_missing_config(tmp_path, caplog):
    config = load_config(tmp_path / "missing.json")

    assert config == DialogueConfig()
    assert "not found" in caplog.text

def test_load_malformed_config(tmp_path, caplog):
    path = tmp_path / "broken.json"
    path.write_text("{ nope")

    assert load_config(path) == DialogueConfig()
    assert "Error loading dialogue config" in caplog.text

def test_load_invalid_values(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"blip_stride": 0}))

    with pytest.raises(ValueError):
        load_config(path)

def test_demo_config_loads():
    from pathlib import Path
    path = Path(__file__).parents[3] / "demos" / "data" / "dialogue_config.json"
    config = load_config(path)
    assert config.blip_stride >= 1
