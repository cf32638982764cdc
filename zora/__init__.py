"""Cluster scan resource models, status aggregation and SaaS payloads."""

__version__ = "0.8.3"