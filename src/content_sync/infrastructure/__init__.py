"""
Infrastructure Layer - talking to the outside world.

Contains:
- http: API gateway over httpx
- resources: auth / article / comment endpoints
- storage: durable key-value storage and the device fingerprint
"""
