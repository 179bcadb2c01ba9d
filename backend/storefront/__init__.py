"""
Storefront platform backend: merchant applications and store provisioning.
"""
