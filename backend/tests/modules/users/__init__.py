"""Tests for modules/users."""
