"""Core services: eligibility, engagement tracking, storage and coin minting."""
