"""Skill tree export document model."""
