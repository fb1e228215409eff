"""Test suite for teddymocks."""
