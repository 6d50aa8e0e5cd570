"""Digest, rendering, storage and history helpers for gitlet commits."""
