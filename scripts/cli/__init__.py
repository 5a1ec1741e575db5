"""
Interactive Pizzeria CLI.

Place orders and view the fixed reports against the configured store.

Entry point: scripts/interactive.py or python -m scripts.cli
"""
