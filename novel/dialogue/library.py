"""
Dialogue library - builds character packs and scenes from database records.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import ValidationError

from engine.resources.database import Database
from novel.components.character import CharacterPack
from novel.components.dialogue import DialogueLine, DialogueScene, Side, StartingPose


class DialogueLibrary:
    """
    Resolved, ready-to-play authored content.

    Record formats (validated beforehand by the Database schemas):

        character: {"id", "emotions": [...], "expressions": {emotion: image},
                    "voice": sample}
        scene:     {"id", "background", "music", "linger_last_line",
                    "left": {"character", "emotion"}, "right": {...},
                    "lines": [{"speaker", "emotion", "side", "disappear_after",
                               "voice", "text", "reveal_rate"}]}

    A scene that names an unknown character is an authoring error; it is
    logged and left out of the library.
    """

    def __init__(self, database: Database):
        self.database = database
        self.characters: dict[str, CharacterPack] = {}
        self.scenes: dict[str, DialogueScene] = {}
        self.logger = logging.getLogger(__name__)

    def load(self) -> None:
        """Build every character, then every scene, from the database."""
        self.characters.clear()
        self.scenes.clear()

        for character_id, record in self.database.characters.items():
            try:
                self.characters[character_id] = self._build_character(record)
            except ValidationError as e:
                self.logger.error(f"Invalid character '{character_id}': {e}")

        for scene_id, record in self.database.scenes.items():
            try:
                self.scenes[scene_id] = self._build_scene(record)
            except (KeyError, ValidationError) as e:
                self.logger.error(f"Invalid scene '{scene_id}': {e}")

        self.logger.info(
            f"Built {len(self.characters)} characters and {len(self.scenes)} scenes"
        )

    def get_character(self, character_id: str) -> CharacterPack:
        return self.characters[character_id]

    def get_scene(self, scene_id: str) -> DialogueScene:
        """Get a scene by id. Raises KeyError if it is not in the library."""
        return self.scenes[scene_id]

    # Builders

    def _build_character(self, record: dict[str, Any]) -> CharacterPack:
        emotions = record.get("emotions") or ["EMPTY"]
        return CharacterPack(
            id=record["id"],
            emotion_options=tuple(emotions),
            expression_map=record.get("expressions", {}),
            default_voice_sample=record.get("voice"),
        )

    def _resolve_character(self, character_id: Optional[str]) -> Optional[CharacterPack]:
        if character_id is None:
            return None
        if character_id not in self.characters:
            raise KeyError(f"unknown character '{character_id}'")
        return self.characters[character_id]

    def _build_pose(self, record: Optional[dict[str, Any]]) -> Optional[StartingPose]:
        if not record:
            return None
        character = self._resolve_character(record["character"])
        return StartingPose(
            character=character,
            emotion=record.get("emotion", character.default_emotion),
        )

    def _build_line(self, record: dict[str, Any]) -> DialogueLine:
        speaker = self._resolve_character(record.get("speaker"))
        default_emotion = speaker.default_emotion if speaker else ""

        fields: dict[str, Any] = {
            "speaker": speaker,
            "emotion": record.get("emotion", default_emotion),
            "side": Side(record.get("side", Side.LEFT.value)),
            "disappear_after": record.get("disappear_after", False),
            "voice_clip": record.get("voice"),
            "text": record.get("text", ""),
        }
        if "reveal_rate" in record:
            fields["reveal_rate"] = record["reveal_rate"]
        return DialogueLine(**fields)

    def _build_scene(self, record: dict[str, Any]) -> DialogueScene:
        return DialogueScene(
            id=record["id"],
            lines=tuple(self._build_line(line) for line in record.get("lines", [])),
            background=record.get("background"),
            background_music=record.get("music"),
            starting_left=self._build_pose(record.get("left")),
            starting_right=self._build_pose(record.get("right")),
            linger_on_last_line=record.get("linger_last_line", False),
        )
