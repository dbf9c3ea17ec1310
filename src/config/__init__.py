"""Configuration for the HTTP dialect converter."""
