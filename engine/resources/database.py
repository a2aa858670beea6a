"""
Dialogue Database.

Handles loading and validation of static authored data (character
packs, dialogue scenes) from JSON.
"""

import json
import logging
from pathlib import Path
from typing import Any

import jsonschema


class Database:
    """
    Central storage for static authored records.

    Layout under data_path:
        schemas/<name>.schema.json
        database/<category>/*.json   (one record, or a list of records)

    Every record must carry an "id". Records failing schema validation,
    and categories without a schema, are logged and skipped.
    """

    # category folder -> schema file name
    CATEGORIES: dict[str, str] = {
        "characters": "character.schema.json",
        "scenes": "scene.schema.json",
    }

    def __init__(self, data_path: Path | str):
        self._data_path = Path(data_path)
        self._schemas: dict[str, Any] = {}

        # Data stores
        self.characters: dict[str, dict[str, Any]] = {}
        self.scenes: dict[str, dict[str, Any]] = {}

        self.logger = logging.getLogger(__name__)

    @property
    def data_path(self) -> Path:
        return self._data_path

    def load_all(self) -> None:
        """Load all data from disk."""
        self._load_schemas()

        self.characters = self.load_category("characters")
        self.scenes = self.load_category("scenes")

        self.logger.info(
            f"Loaded {len(self.characters)} characters, "
            f"{len(self.scenes)} scenes."
        )

    def _load_schemas(self) -> None:
        """Load JSON schemas."""
        schema_dir = self._data_path / "schemas"
        if not schema_dir.exists():
            self.logger.warning(f"Schema directory not found: {schema_dir}")
            return

        for schema_file in schema_dir.glob("*.schema.json"):
            try:
                with open(schema_file, 'r', encoding='utf-8') as f:
                    self._schemas[schema_file.name] = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                self.logger.error(f"Failed to load schema {schema_file}: {e}")

    def load_category(self, folder: str) -> dict[str, dict[str, Any]]:
        """Load and validate all JSON files in a category folder."""
        category_dir = self._data_path / "database" / folder
        data_store: dict[str, dict[str, Any]] = {}

        if not category_dir.exists():
            self.logger.warning(f"Data directory not found: {category_dir}")
            return data_store

        schema_name = self.CATEGORIES.get(folder, f"{folder}.schema.json")
        schema = self._schemas.get(schema_name)
        if schema is None:
            self.logger.warning(f"No schema found for {folder} ({schema_name})")
            return data_store

        for file_path in sorted(category_dir.glob("*.json")):
            try:
                with open(file_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                self.logger.error(f"Failed to load {file_path}: {e}")
                continue

            records = data if isinstance(data, list) else [data]
            for record in records:
                try:
                    jsonschema.validate(instance=record, schema=schema)
                except jsonschema.ValidationError as e:
                    self.logger.error(f"Validation error in {file_path}: {e.message}")
                    continue

                if record["id"] in data_store:
                    self.logger.warning(f"Duplicate {folder} id '{record['id']}' in {file_path}")
                data_store[record["id"]] = record

        return data_store

    def get_character(self, character_id: str) -> dict[str, Any] | None:
        return self.characters.get(character_id)

    def get_scene(self, scene_id: str) -> dict[str, Any] | None:
        return self.scenes.get(scene_id)
