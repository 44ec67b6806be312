"""Configuration, logging, storage and credential primitives."""
