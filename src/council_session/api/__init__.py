"""HTTP transport for the council session service."""
