"""Metrics engine.

This module derives organizational rollups, rank qualification,
status buckets, and contributor rankings from an associate list.
Every function is pure and recomputes from its input on each call.
"""
