"""Flashcard import subsystem.

This package turns raw JSON or CSV text into validated card collections.
Each attempt either assembles a full collection or fails with one error.
"""
