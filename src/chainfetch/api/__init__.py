"""HTTP API for keyset resolution."""
