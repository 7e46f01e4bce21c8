"""Skill module - install the bundled SKILL.md for agent runtimes."""

from .installer import candidate_dirs, install_skill

__all__ = ["candidate_dirs", "install_skill"]
