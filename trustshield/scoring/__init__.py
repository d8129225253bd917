"""
Scoring pipeline for TrustShield.

Contains the statistical and fraud models, run per business in order:
- Global Statistics (once per dataset)
- Trust Score Model
- Feature Extractor
- Fraud Confidence Simulator
"""
