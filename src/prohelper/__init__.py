"""ProHelper - contractor invitation management client.

Loads, filters and acts on contractor invitations exchanged between
organizations on the ProHelper construction-management platform.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
