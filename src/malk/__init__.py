"""malk: save file editor for The Simpsons: Hit & Run."""

__version__ = '0.2.0'
