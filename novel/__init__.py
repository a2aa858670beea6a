"""
Visual-novel module.

Provides dialogue-specific layers built on top of the engine:
- Components (character packs, scenes, lines, runtime state)
- Dialogue (playback engine, reveal, voice, presenter, host, loading)
"""
