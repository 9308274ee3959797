"""HTTP API for ytcast."""
