"""Tests for feature modules."""
