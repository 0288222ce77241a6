"""podembed - podcast feed to embeddable player data, plus a WebVTT transcript proxy."""

__version__ = "0.1.0"
