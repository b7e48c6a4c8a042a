"""Persistence for extracted SMS transactions."""
