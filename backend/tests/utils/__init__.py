"""Test doubles for the content translation service."""
