"""Presentation helpers - labels, colours and value formatting."""
