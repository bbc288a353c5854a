"""Progression domain services: unlock gate, answer checking and ranking.

Imported by HTTP routes, socket handlers and CLI commands, keeping
transport concerns separated from the level progression rules.
"""
