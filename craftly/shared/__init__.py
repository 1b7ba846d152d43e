"""Shared utilities and cross-cutting helpers (datetime, IDs, logging).

Used by domain, application, infrastructure and the client SDK. No business logic.
"""
