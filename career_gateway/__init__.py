"""Package marker for the career portal gateway.

REST front door for the upstream HRMS GraphQL API.
"""

__version__ = "1.0.0"
