"""
External integrations: persistent storage backends and the Shopify Admin API.
"""
