"""Zendesk data-source service.

Fetches tickets, users and organizations from the Zendesk REST API and
serves them to a visualization host as frames, exports and batch results.
"""

__version__ = "0.1.0"
