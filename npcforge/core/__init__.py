"""Core models for npcforge."""
