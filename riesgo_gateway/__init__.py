"""
Riesgo Gateway - Credit-Bureau Risk Classification Service

A FastAPI-based microservice that fetches InfoExperto reports, classifies
them into risk tiers, evaluates medium-risk subjects and computes the
Situación 5 loan offer.
"""

__version__ = "0.1.0"
