"""Game rules for a single room.

``lifecycle`` moves a room between waiting, writing and guessing,
``shuffle`` hands out prompts so nobody draws their own, and ``collector``
drops rooms that have stopped broadcasting.
"""
