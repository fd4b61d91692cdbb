"""Slash command registration for the quest bot."""
