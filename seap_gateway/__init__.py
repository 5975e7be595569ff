"""
SEAP Gateway - Short-Term Loan Eligibility Service

A FastAPI-based microservice that evaluates loan applicants through a
sequential validation pipeline (income, delinquency registry, credit
bureau, payer bank) and computes the maximum approvable amount.
"""

__version__ = "0.1.0"
