"""Shared utilities: errors, log masking, validation."""
