"""Command-line interface for SkillStack."""
