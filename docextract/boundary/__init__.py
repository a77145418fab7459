"""
Boundary layer.

Adapters for state and services outside the extraction core: the
process-local job store and the generative model client.
"""
