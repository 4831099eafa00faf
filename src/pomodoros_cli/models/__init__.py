"""Domain models for Pomodoros CLI."""
