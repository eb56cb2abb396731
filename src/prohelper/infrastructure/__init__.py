"""Infrastructure adapters: HTTP gateway and credential providers."""
