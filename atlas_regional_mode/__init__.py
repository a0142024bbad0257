"""MongoDB Atlas private endpoint regional-mode resource.

Read, update and import hooks for the per-project regional-mode setting,
plus the convergence poller that waits for the background teardown of
regional endpoints after regional mode is disabled.
"""

__version__ = "0.1.0"
