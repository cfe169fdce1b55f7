"""Hash-chained moral ledger, safety envelopes, eco-fairness guards and orchestration models."""

__version__ = "0.1.0"