"""Free-electron laser building blocks: input decks, profiles, sequences, beam and field loading, wakefields."""

__version__ = "0.1.0"