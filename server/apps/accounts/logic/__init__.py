"""Business logic for accounts app.

Caller resolution is explicit: request handlers turn the incoming
request into a ``User | None`` once and pass it into every file
registry and contribution ledger operation.
"""
