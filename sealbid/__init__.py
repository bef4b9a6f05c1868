"""
sealbid - Two-party sealed-bid auctions

Runs commit-reveal auctions between two seats:
- Capability tokens instead of accounts
- SHA-256 commitments bound to auction and seat
- Phase derived from stored fields, never stored
- Atomic conditional updates at the storage boundary
"""
