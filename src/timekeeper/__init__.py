"""Timekeeper package.

Employee clock-in/clock-out tracking organized by feature modules
(attendance, hr, reports) with a thin Flask controller layer over
service/repository layers.
"""

__version__ = "1.0.0"
