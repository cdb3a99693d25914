"""Authoritative combat and world-state server for a top-down arena game."""
