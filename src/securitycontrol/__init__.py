"""securitycontrol - Security control validation demo.

Models security controls as static records and scores them from their
status, evidence, verification recency and ownership.
"""

__version__ = "1.0.0"
