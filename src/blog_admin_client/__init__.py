"""Async data-access and session layer for the blog admin console."""
