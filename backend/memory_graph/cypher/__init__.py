"""Cypher text generation: sanitizing, statements, presets and guards."""
