"""Replicates open job listings from the master catalog into tiered public catalogs."""
