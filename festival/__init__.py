"""Festival programme workflow engine.

Coordinates festival Programs and the Screenings submitted to them, with
relationship-based authorization and session integrity rules.
"""

__version__ = "0.1.0"
