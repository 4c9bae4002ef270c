"""Parsers turning ledger and price text into in-memory records."""
