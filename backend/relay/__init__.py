"""Storefront Relay — forwards storefront calls to Webflow, FoxyCart and Airtable.

Invariants:
    - Package root contains no executable code beyond the version string
"""

__version__ = "1.0.0"
