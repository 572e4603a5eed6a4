"""usergate: user registration, login and ownership-scoped user management.

Two processes:
- the authentication service (usergate.service) owns the user store
- the gateway (usergate.gateway) is the public HTTP API and issues tokens
"""

__version__ = "0.1.0"
