"""Snap intake hub: token-gated photo intake and audit service."""
