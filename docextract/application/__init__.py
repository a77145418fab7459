"""
Application layer.

Service orchestrators sitting between the API and the extraction core.
"""
