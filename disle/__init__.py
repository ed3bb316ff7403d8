"""Alias expansion engine for dice rolling bots"""

version = "0.1.0"
