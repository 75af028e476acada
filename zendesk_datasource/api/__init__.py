"""HTTP API of the Zendesk data-source service."""
