"""Steamer catalog service: FastAPI surface over the enrichment pipeline."""
