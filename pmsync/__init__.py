"""pmsync - Gmail <--> file sync for small text notes.

Namespace package containing:
- pmsync.sdk: Core SDK (authorization, retrieval pipeline, sorting, Gmail store)
- pmsync.cli: Command-line interface
"""

__version__ = "0.3.0"
