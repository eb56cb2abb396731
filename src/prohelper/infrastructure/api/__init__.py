"""HTTP access to the ProHelper invitation API."""

from prohelper.infrastructure.api.http_gateway import HttpInvitationGateway

__all__ = ["HttpInvitationGateway"]
