"""Shared configuration and models for Steamer libraries and services."""
