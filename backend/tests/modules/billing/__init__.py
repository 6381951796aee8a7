"""Tests for modules/billing."""
