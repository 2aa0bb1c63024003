"""tzresolver - timezone identifier resolution and wall-clock conversion.

Resolves zone names, abbreviations, hour offsets and military letter codes at
a point in time into bounded-validity timezone descriptors backed by the IANA
database, and converts date values between descriptors.
"""

from .timezone import (
    UTC_DESCRIPTOR,
    DateValue,
    TimezoneDescriptor,
    ZoneNotFound,
    ZoneResolver,
    convert,
    diff,
    exists,
    local,
    resolve,
)

__version__ = "1.0.0"
__description__ = "Timezone identifier resolution and wall-clock conversion"

__all__ = [
    "UTC_DESCRIPTOR",
    "DateValue",
    "TimezoneDescriptor",
    "ZoneNotFound",
    "ZoneResolver",
    "__description__",
    "__version__",
    "convert",
    "diff",
    "exists",
    "local",
    "resolve",
]
