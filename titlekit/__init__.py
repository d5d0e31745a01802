"""Title metadata, ticket, CIA, SMDH, banner, save-chip, path and UI layout helpers."""

__version__ = "0.1.0"