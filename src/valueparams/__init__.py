"""valueparams: self-describing, validating value types.

This package provides leaf parameters for structured records: network
addresses, ports, dates and times, booleans, identifiers, secrets and
database connectors. Each type parses its textual forms, renders a
canonical text and rejects malformed input at the boundary.
"""

# Export the public API
from .api import *  # noqa: F403, F401
from .api import __all__, __version__  # noqa: F401
