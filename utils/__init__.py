"""Shared configuration, logging, schemas and exceptions."""
