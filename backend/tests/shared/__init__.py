"""Tests for shared."""
