"""Adapters binding the domain ports to concrete persistence libraries."""
