"""API module for peereval.

api layer:
- Reads the caller identity attached upstream, reads DB through repo
- Returns payloads for UI
- Forbidden: writes, auth token handling
"""
