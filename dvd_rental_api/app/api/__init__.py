"""
API package containing the HTTP routes.

``router`` bundles every endpoint served under ``/api``; the liveness
probe is mounted separately at the application root.
"""
