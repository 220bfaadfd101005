"""chessmatch: PGN reading/writing and the chess player clock protocol."""

__version__ = "0.1.0"
