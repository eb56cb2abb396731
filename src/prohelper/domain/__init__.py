"""Domain layer for the ProHelper invitations client."""
