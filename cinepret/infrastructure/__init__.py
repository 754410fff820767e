"""Couche infrastructure: implementations concretes des ports."""
