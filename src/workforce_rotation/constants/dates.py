"""Date sentinel constants.

The HR source marks "no termination date scheduled" with a far-future
date. It reaches us in several encodings, all listed here.
"""

from datetime import date

# 9999-12-31 as YYYYMMDD
SENTINEL_YYYYMMDD = 99991231
SENTINEL_YYYYMMDD_STR = "99991231"

# 9999-12-31T00:00:00Z in epoch milliseconds, as wrapped in /Date(...)/
SENTINEL_EPOCH_MILLIS = 253402214400000

SENTINEL_DATE = date(9999, 12, 31)

# Keys under which nested date payloads carry their value
DATE_VALUE_KEYS = ("value", "Value", "date", "Date")

# Wire format for reference-date addressing
SAP_DATE_FORMAT = "%Y%m%d"
