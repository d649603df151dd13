"""Global constants for valueparams.

This module centralizes the numeric domains shared by several parameter
types to ensure consistency and prevent duplication.
"""

# Port domain; INVALID_PORT marks a missing range bound
INVALID_PORT: int = -1
MIN_PORT: int = 0
MAX_PORT: int = 65535

# Address widths in bits
IPV4_BITS: int = 32
IPV6_BITS: int = 128
IPV4_PARTS: int = 4
IPV6_PARTS: int = 8

# Default characters surrounding multi-element list values
LIST_OPEN: str = "["
LIST_CLOSE: str = "]"
LIST_SEPARATOR: str = ","

# Default separator between date and time in a timestamp
TIMESTAMP_SEPARATOR: str = "T"
