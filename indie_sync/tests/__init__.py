"""Unit tests for indie_sync."""
