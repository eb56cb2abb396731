"""Application services for the ProHelper invitations client.

Services hold the client-side state for invitation screens and talk to the
backend only through an InvitationGateway.
"""
