"""Skill installation: models, output path guard, local state and the manager."""
