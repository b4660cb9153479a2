"""
Games module - Concrete game setups for the engine.

Each game has its own subpackage with:
- Configuration (player count, deck, fleet, seed)
- Card, corporation and mercenary definitions
"""
