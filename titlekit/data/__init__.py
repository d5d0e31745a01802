"""Parsers for title metadata, tickets, CIA containers, SMDH icons and DS banners."""

__all__ = ["bnr", "cia", "smdh", "ticket", "tmd"]