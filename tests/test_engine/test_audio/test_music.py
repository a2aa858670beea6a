import pytest
from engine.audio.music import MusicPlayer

@pytest.fixture
def mixer():
    import pygame
    pygame.mixer.get_init.return_value = (44100, -16, 2)
    pygame.mixer.music.get_busy.return_value = False
    return pygame.mixer

def test_play_loads_track(mixer):
    player = MusicPlayer()

    assert player.play("theme.ogg", loops=-1, fade_ms=200)

    mixer.music.load.assert_called_once_with("theme.ogg")
    mixer.music.play.assert_called_once_with(loops=-1, fade_ms=200)
    assert player.current_track == "theme.ogg"

def test_same_track_keeps_playing(mixer):
    player = MusicPlayer()
    player.play("theme.ogg")
    mixer.music.get_busy.return_value = True

    assert player.play("theme.ogg")
    assert mixer.music.load.call_count == 1

    player.play("other.ogg")
    assert mixer.music.load.call_count == 2

def test_stop_fades_out(mixer):
    player = MusicPlayer()
    player.play("theme.ogg")

    player.stop(fade_ms=300)

    mixer.music.fadeout.assert_called_once_with(300)
    assert player.current_track == ""

def test_volume_clamped(mixer):
    player = MusicPlayer()
    player.volume = 1.5

    assert player.volume == 1.0
    mixer.music.set_volume.assert_called_with(1.0)

def test_play_without_mixer():
    import pygame
    pygame.mixer.get_init.return_value = None

    player = MusicPlayer()
    assert player.play("theme.ogg") is False
    assert player.current_track == ""
