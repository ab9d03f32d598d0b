"""Bundled YAML configuration (engine.yaml and its includes, factory defaults)."""
