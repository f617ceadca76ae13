"""Dice board game service: board generation, the bet state machine, and its Redis-backed session."""
