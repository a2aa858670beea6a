import pytest
from unittest.mock import MagicMock, patch
from engine.audio.manager import AudioManager
from engine.core.events import AudioEvent

# All tests here need the mock_pygame fixture from conftest
pytestmark = pytest.mark.usefixtures("mock_pygame")

@pytest.fixture
def manager():
    import pygame
    pygame.mixer.get_init.return_value = None

    mgr = AudioManager()
    mgr.init()
    return mgr

def test_audio_manager_init(manager):
    import pygame
    assert manager._initialized
    pygame.mixer.set_reserved.assert_called_once_with(1)
    assert manager._voice_channel is pygame.mixer.Channel.return_value

def test_play_voice_stops_previous_clip(manager):
    channel = manager._voice_channel
    manager._sound_cache["blip.wav"] = MagicMock()

    result = manager.play_voice("blip.wav")

    assert result is channel
    channel.stop.assert_called_once()
    channel.play.assert_called_once_with(manager._sound_cache["blip.wav"])

def test_play_voice_applies_volume(manager):
    manager._sound_cache["blip.wav"] = MagicMock()
    manager.set_master_volume(0.5)
    manager.set_category_volume("voice", 0.5)

    manager.play_voice("blip.wav")

    manager._voice_channel.set_volume.assert_called_with(0.25)

def test_play_voice_missing_file_is_silent(manager, tmp_path):
    result = manager.play_voice(str(tmp_path / "missing.wav"))
    assert result is None
    manager._voice_channel.play.assert_not_called()

def test_play_voice_before_init_does_nothing():
    mgr = AudioManager()
    mgr._sound_cache["blip.wav"] = MagicMock()
    assert mgr.play_voice("blip.wav") is None

def test_voice_played_event(manager, event_bus):
    manager.event_bus = event_bus
    manager._sound_cache["blip.wav"] = MagicMock()
    received = []
    event_bus.subscribe(AudioEvent.VOICE_PLAYED, received.append, weak=False)

    manager.play_voice("blip.wav")

    assert received[0]["file"] == "blip.wav"

def test_bgm_delegates_to_music_player(manager, event_bus):
    manager.event_bus = event_bus
    received = []
    event_bus.subscribe(AudioEvent.MUSIC_STARTED, received.append, weak=False)
    event_bus.subscribe(AudioEvent.MUSIC_STOPPED, received.append, weak=False)

    with patch.object(manager.music, "play", return_value=True) as mock_play, \
         patch.object(manager.music, "stop") as mock_stop:
        manager.play_bgm("theme.ogg", loop=True, fade_ms=500)
        manager.music._current_track = "theme.ogg"
        manager.stop_bgm(fade_ms=250)

    mock_play.assert_called_once_with("theme.ogg", loops=-1, fade_ms=500)
    mock_stop.assert_called_once_with(fade_ms=250)
    assert [e.type for e in received] == [AudioEvent.MUSIC_STARTED, AudioEvent.MUSIC_STOPPED]
    assert received[1]["file"] == "theme.ogg"

def test_settings_round_trip(manager):
    manager.apply_settings({"master": 0.8, "music": 0.5, "voice": 2.0, "unknown": 0.1})

    settings = manager.get_settings()
    assert settings == {"master": 0.8, "music": 0.5, "voice": 1.0}
    assert manager.music.volume == pytest.approx(0.4)

def test_stop_bgm_without_track_is_quiet(manager, event_bus):
    manager.event_bus = event_bus
    received = []
    event_bus.subscribe(AudioEvent.MUSIC_STOPPED, received.append, weak=False)

    manager.stop_bgm()

    assert received == []
