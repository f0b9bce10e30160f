"""
Target language support.

Only Go is generated; its type mapping and naming rules feed the template
helpers.
"""
