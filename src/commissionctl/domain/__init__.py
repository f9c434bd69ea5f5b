"""Domain layer — fee rules, operations, the allowance ledger, and the engine.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
