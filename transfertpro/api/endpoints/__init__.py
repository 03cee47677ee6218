"""Typed wrappers around the TransfertPro REST endpoints."""
