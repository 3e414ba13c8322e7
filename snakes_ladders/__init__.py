"""Snakes & Ladders game engine and simulator."""
