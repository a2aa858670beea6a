"""
Dialogue Demo: Linear visual-novel scene playback

Demonstrates:
- Loading character packs and scenes from validated JSON
- Typewriter reveal with voice blips
- Speaker slots: speaking, greyed, vanished
- Advance input (Enter / Space / Z / left click / gamepad A)

Missing portrait and audio files are fine: slots fall back to
placeholder boxes and voices stay silent.

Run: python -m demos.dialogue_demo [scene_id]
"""

import logging
import sys
from pathlib import Path

import pygame

from engine.audio import AudioManager
from engine.core import Action, EventBus, Scheduler
from engine.input import InputHandler
from engine.resources import Database
from novel.dialogue import (
    DialogueHost,
    DialogueLibrary,
    DialoguePlaybackEngine,
    PygameDialoguePresenter,
    load_config,
)

DATA_PATH = Path(__file__).parent / "data"
ASSET_PATH = DATA_PATH / "assets"


def main():
    logging.basicConfig(level=logging.INFO)
    scene_id = sys.argv[1] if len(sys.argv) > 1 else "station"

    print("=" * 60)
    print("Dialogue Demo")
    print("=" * 60)

    pygame.init()
    screen = pygame.display.set_mode((1280, 720))
    pygame.display.set_caption("Dialogue Demo")
    clock = pygame.time.Clock()

    config = load_config(DATA_PATH / "dialogue_config.json")

    database = Database(DATA_PATH)
    database.load_all()
    library = DialogueLibrary(database)
    library.load()

    event_bus = EventBus()
    audio = AudioManager(event_bus)
    audio.init()
    audio.apply_settings(config.volumes)

    scheduler = Scheduler()
    input_handler = InputHandler(event_bus)
    presenter = PygameDialoguePresenter(audio, str(ASSET_PATH), config)
    engine = DialoguePlaybackEngine(presenter, scheduler, event_bus, config)
    host = DialogueHost(engine, input_handler, scheduler)

    running = True

    def on_scene_end(scene):
        nonlocal running
        # A lingering scene waits for one more press, see on_dismiss
        if not scene.linger_on_last_line:
            running = False

    def on_dismiss(scene):
        nonlocal running
        running = False

    host.on_scene_end(on_scene_end)
    host.on_dismiss(on_dismiss)
    host.play(library.get_scene(scene_id))

    while running:
        dt = clock.tick(60) / 1000.0

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            input_handler.process_event(event)
        input_handler.update()

        if input_handler.is_action_just_pressed(Action.QUIT):
            running = False

        host.update(dt)

        screen.fill((0, 0, 0))
        host.render(screen)
        pygame.display.flip()

    audio.quit()
    pygame.quit()
    print("Demo complete!")


if __name__ == "__main__":
    main()
