"""CNC Library Client.

Client for the CNC digital-content library (post-processors, machine
schemas, interpreters and digital machine kits).

This package provides:
- Incremental catalog loading with filter/sort resets and scroll-driven paging
- Thin adapter layer over the library REST API
- Dealer authoring and admin moderation workflows
"""

__version__ = "0.1.0"
