"""
Utility modules for TrustShield.

Cross-cutting concerns:
- Storage: File I/O helpers for datasets and reports
"""
