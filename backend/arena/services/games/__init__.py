"""Game domain services: outcome resolution and quick-match pairing.

This package contains pure(ish) domain logic that should be imported by
the session controller, keeping transport concerns separated from core
game mechanics.
"""
