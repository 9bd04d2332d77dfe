"""Router configuration.

RouterConfig is a frozen dataclass shared by every context in a router
tree, the same way the match table is.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    Override what you need::

        router = new_router(RouterConfig(debug=True, port=3000))
    """

    # Error rendering: include exception detail in response bodies
    debug: bool = False

    # Server (only read by Router.run())
    host: str = "127.0.0.1"
    port: int = 8000
    reload: bool = False
