"""Configuration for the inspection pipeline."""
