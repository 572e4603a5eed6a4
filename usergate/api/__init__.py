"""Shared request handling for usergate's Flask apps."""
