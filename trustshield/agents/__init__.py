"""
Agent implementations for TrustShield.

Contains the modules around the scoring core:
- Ingestion Agent (raw records → businesses)
- Scoreboard Aggregator (scores → ranked report)
"""
