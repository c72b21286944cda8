"""Feature modules for neo-access.

Each feature follows the same layout: ``entities`` (domain dataclasses),
``repositories`` (SQL against the auth schema) and ``services`` (the
operations other code calls).
"""
